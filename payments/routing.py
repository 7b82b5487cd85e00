# payments/routing.py - Subscription payment route table
"""
Static route table for the subscription payment API.

Each entry binds one (path, verb) pair to an ordered middleware chain and a
controller. The chain is a tuple of DRF permission classes checked in order;
the first one that refuses ends the request (401 for a missing or bad
identity) and the controller never runs. An empty chain means the route is
public and the request is not authenticated at all.

Routes sharing a path are served by one view. A verb that no route declares
for a path answers 404, the same as a path nobody declared.
"""

from collections import namedtuple

from django.urls import path
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from . import views

Route = namedtuple('Route', ['path', 'method', 'middleware', 'handler', 'name'])

# Auth gate applied to every guarded route
AUTHENTICATED = (IsAuthenticated,)
PUBLIC = ()

ROUTES = [
    # Buy Subscription
    Route('subscribe', 'GET', AUTHENTICATED, views.buy_subscription, 'buy_subscription'),

    # Verify Payment and save reference in database
    Route('paymentverification', 'POST', AUTHENTICATED, views.payment_verification, 'payment_verification'),

    # Get Razorpay key
    Route('razorpaykey', 'GET', PUBLIC, views.get_razorpay_key, 'razorpay_key'),

    # Cancel Subscription
    Route('subscribe/cancel', 'DELETE', AUTHENTICATED, views.cancel_subscription, 'cancel_subscription'),
]


class RouteView(APIView):
    """
    APIView serving the routes declared for one path

    ``routes`` maps an upper-case HTTP verb to its Route.
    """

    routes = {}

    def _current_route(self):
        return self.routes.get(self.request.method.upper())

    def get_authenticators(self):
        # Runs before DRF wraps the request; self.request is the Django HttpRequest
        route = self._current_route()
        if route is None or not route.middleware:
            return []
        return super().get_authenticators()

    def get_permissions(self):
        route = self._current_route()
        if route is None:
            return []
        return [permission() for permission in route.middleware]

    def http_method_not_allowed(self, request, *args, **kwargs):
        raise NotFound(f'Cannot {request.method} {request.path}')

    def head(self, request, *args, **kwargs):
        # Django would alias HEAD to GET; only declared verbs are served
        return self.http_method_not_allowed(request, *args, **kwargs)


def _bind_handler(route):
    """View method delegating straight to the controller"""
    def handle(self, request, *args, **kwargs):
        return route.handler(request, *args, **kwargs)

    handle.__name__ = route.method.lower()
    handle.__doc__ = route.handler.__doc__
    return handle


def build_route_view(route_path, routes):
    """
    Create the RouteView subclass for one path

    Args:
        route_path: URL path the routes share
        routes: Routes declared for that path

    Returns:
        type: RouteView subclass with one method per declared verb
    """
    attrs = {
        'routes': {route.method.upper(): route for route in routes},
        '__doc__': f'Routes for /{route_path}',
    }
    for route in routes:
        attrs[route.method.lower()] = _bind_handler(route)

    class_name = ''.join(part.capitalize() for part in route_path.replace('/', '_').split('_')) + 'RouteView'
    return type(class_name, (RouteView,), attrs)


def build_urlpatterns(routes):
    """
    Turn a route table into Django urlpatterns, one pattern per path

    Args:
        routes: iterable of Route

    Returns:
        list: urlpatterns in declaration order
    """
    by_path = {}
    for route in routes:
        by_path.setdefault(route.path, []).append(route)

    urlpatterns = []
    for route_path, path_routes in by_path.items():
        view_class = build_route_view(route_path, path_routes)
        urlpatterns.append(
            path(route_path, view_class.as_view(), name=path_routes[0].name)
        )

    return urlpatterns
