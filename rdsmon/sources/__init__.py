"""Group sources feeding input events to the decoder."""
