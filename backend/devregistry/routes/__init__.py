# Routes package init
"""
Developer Registry — API Routes Package
=========================================

Route Inventory:
    - levels.py:      GET/POST /niveis, GET/PUT/DELETE /niveis/{id}
    - developers.py:  GET/POST /desenvolvedores, GET/PUT/DELETE /desenvolvedores/{id}
    - health.py:      GET /healthcheck

Routes stay thin: they extract request data, call a service with the
request's session, and return the service result.
"""
