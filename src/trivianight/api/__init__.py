"""HTTP routers exposing game actions and derived views."""
