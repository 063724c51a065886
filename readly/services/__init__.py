"""
Readly Backend: Services Layer
===============================

One stateless service per collection, each called with the Database handle
injected into the route.

Service Inventory:
    - BlogService:      blog listing, featured blogs, lookup, insert
    - CommentService:   comment insert and listing
    - WishlistService:  per-user wishlist with duplicate prevention
    - documents:        identifier parsing and BSON-to-JSON conversion
"""
