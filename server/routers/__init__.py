"""
HTTP routers for sessions, live translation and the phrase library
"""
