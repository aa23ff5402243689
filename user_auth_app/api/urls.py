from django.urls import path

from .views import (
    LoginView,
    LogoutView,
    PasswordForgotView,
    PasswordResetView,
    RegistrationView,
    VerifyEmailView,
)

urlpatterns = [
    path("registration/", RegistrationView.as_view(), name="registration"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("email/verify/<str:code>/", VerifyEmailView.as_view(), name="verify-email"),
    path("password/forgot/", PasswordForgotView.as_view(), name="password-forgot"),
    path("password/reset/", PasswordResetView.as_view(), name="password-reset"),
]
