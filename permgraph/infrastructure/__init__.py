"""Infrastructure layer: implementations of the application repository interfaces."""
