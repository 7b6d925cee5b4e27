"""Core building blocks shared by the game: input, terminal, config, events, rendering."""
