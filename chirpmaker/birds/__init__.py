"""Bird call profiles, their registry and the dispatcher that plays them."""
