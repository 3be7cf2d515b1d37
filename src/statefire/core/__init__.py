"""statefire core: event resolution engine, configuration and errors."""
