# Routes package init
"""
Inkwell Backend — API Routes Package
======================================

Route Inventory:
    - categories.py: POST/GET        /categories
                     GET/PATCH/DELETE /categories/{category_id}
    - posts.py:      POST/GET        /posts
                     GET/PATCH/DELETE /posts/{post_id}
    - health.py:     GET  /health    (public)

Routes stay thin: extract input, call one service, apply the post policy
where it exists, and pick the status code. Errors propagate as exceptions
to the handlers registered in main.py.
"""
