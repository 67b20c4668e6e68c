"""Core package for shared library functionality.

- **config**: Settings loaded from the environment
- **constants**: Wire-format constants and resource names
- **context**: Per-call request id management
- **exceptions**: Structured exception hierarchy with error codes
- **logging**: Opt-in Loguru configuration
- **observability**: Opt-in OpenTelemetry tracing
- **types**: Type aliases for better code clarity
"""
