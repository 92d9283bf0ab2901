"""HTTP surface of routerpc."""
