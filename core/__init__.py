"""Request handling for the Disclosure Check tool."""
