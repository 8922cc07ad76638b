"""RDS group-level decoding: station model, text buffers, applications."""
