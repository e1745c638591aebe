"""Command-line orchestration: config, engine wiring, live loop, output."""
