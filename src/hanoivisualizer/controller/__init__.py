"""Qt controllers: drive the model from the event loop and expose it through Signals."""
