"""Game rules, session state, the real-time loop and the menu around it."""
