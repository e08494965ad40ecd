"""Optional caller identity for the HTTP layer.

The query engine never sees roles; only routers read ``request.state.role``.
"""
