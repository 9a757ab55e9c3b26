"""
FastAPI routers for all endpoints.

Routes read the submitted form, call one action, and translate its
ActionResult into a redirect, JSON, or HTML response.
"""
