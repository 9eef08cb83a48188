from __future__ import annotations

from django.contrib.auth import views as auth_views


class CustomLoginView(auth_views.LoginView):
    template_name = "registration/login.html"
    redirect_authenticated_user = True


class CustomLogoutView(auth_views.LogoutView):
    template_name = "registration/logged_out.html"
