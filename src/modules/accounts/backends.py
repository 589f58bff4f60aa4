"""Authentication backend accepting a username, an e-mail or a phone."""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q


class EmailOrPhoneBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = username or kwargs.get("email") or kwargs.get("phone")
        if not identifier or password is None:
            return None

        User = get_user_model()
        lookup = Q(username__iexact=identifier) | Q(email__iexact=identifier)
        if any(ch.isdigit() for ch in identifier):
            lookup |= Q(phone=identifier)
        user = User.objects.filter(lookup).order_by("date_joined").first()

        if user is None:
            # Run the hasher anyway to keep timing uniform.
            User().set_password(password)
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
