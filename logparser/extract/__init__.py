"""
Extract Layer - Pure I/O to the Events API

This layer handles all external data fetching with no storage concerns.
- No imports from load or orchestration layers
- Classifies responses, parses pages, follows Link headers
- Handles rate limiting and surfaces retryable failures
"""
