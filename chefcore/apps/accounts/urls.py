from django.urls import path
from . import views

urlpatterns = [
    # Auth del panel (sesión de Django, sin contraseñas en el navegador)
    path("login/",  views.CustomLoginView.as_view(), name="login"),
    path("logout/", views.CustomLogoutView.as_view(), name="logout"),
]
