"""Interactive grid shortest-path visualizer."""
