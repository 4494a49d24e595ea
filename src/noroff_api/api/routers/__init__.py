"""
noroff_api.api.routers

HTTP routers, one module per API area.
"""

# Package marker.
