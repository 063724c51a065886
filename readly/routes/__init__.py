"""
Readly Backend: API Routes Package
===================================

Route Inventory:
    - health.py:    GET /, GET /health
    - blogs.py:     GET/POST /blogs, GET /blogs/{id}, GET /featured-blogs
    - wishlist.py:  GET/POST /wishlist, DELETE /wishlist/{id}
    - comments.py:  GET/POST /comments

Routes stay thin: extract parameters, call one service method, return its
result. Errors are raised as application exceptions and formatted by the
handlers in main.py.
"""
