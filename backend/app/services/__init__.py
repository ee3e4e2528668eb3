# Services package init
"""
Inkwell Backend — Services Layer
==================================

Service Inventory:
    - EntityService (generic): projected CRUD for one ORM model
    - CategoryService: categories, no authorization rules
    - PostService: posts
    - PostPolicy: ownership/role rules applied to post results in the routes

Services are stateless singletons; each call receives the request's
AsyncSession as its first argument.
"""
