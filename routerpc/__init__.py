"""
routerpc - turn plain Python handlers into JSON HTTP routes and call them back.
"""

__version__ = "0.1.0"
__logo__ = "🔌"
