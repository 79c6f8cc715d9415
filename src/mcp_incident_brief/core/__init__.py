"""Core parsing and rule engine (pure, no I/O except :mod:`.source`)."""
