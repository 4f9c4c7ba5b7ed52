"""
Services for agents-lint.

- parser: NDJSON transcript decoding
- correlator: tool_use / tool_result correlation
- report: text and JSON rendering of check results
"""
