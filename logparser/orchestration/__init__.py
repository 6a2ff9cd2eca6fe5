"""
Orchestration Layer - Workflow Coordination

This layer coordinates the fetch workflow.
- Pure workflow coordination
- No parsing or storage details
- Composes extract and load operations
"""
