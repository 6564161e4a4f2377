"""Paper Trail UI: graph view state, renderer and NiceGUI components."""
