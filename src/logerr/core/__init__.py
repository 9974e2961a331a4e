"""Core domain: records, errors, ports, encoders and the Logger."""
