"""Host bindings that translate widget events into engine calls."""
