"""Drawing-surface contract: scenes and style roles."""
