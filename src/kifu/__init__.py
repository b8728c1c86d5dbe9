"""kifu: branch-aware game record (SGF) persistence for a Go GUI and engine."""
