from rest_framework.permissions import BasePermission


class IsAuthenticatedToAdd(BasePermission):
    """
    Adding a product (POST) needs a logged in user; the other
    line item operations stay open.
    """

    def has_permission(self, request, view):
        if request.method != "POST":
            return True
        return bool(request.user and request.user.is_authenticated)
