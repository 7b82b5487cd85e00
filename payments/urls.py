from .routing import ROUTES, build_urlpatterns

app_name = 'payments'

urlpatterns = build_urlpatterns(ROUTES)
