"""Users app API views.

Endpoints include:
- auth/google, auth/signin, auth/admin-signin, auth/register: issue a JWT
  pair and return it with the account.
- auth/refresh, auth/verify, auth/signout: token lifecycle.
- account/profile: read and update the caller's profile.
- account/wishlist: list, add and remove saved products.
- admin/users: staff-only account listing.
"""

from catalog.serializers import ProductSummarySerializer
from common.exceptions import AuthorizationError, NotFoundError, UpstreamError, ValidationError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

from . import selectors, services
from .logging import log_auth_event
from .serializers import (
    AdminSignInSerializer,
    AuthResponseSerializer,
    GoogleSignInSerializer,
    ProfileUpdateSerializer,
    RegistrationSerializer,
    SignInSerializer,
    SignOutSerializer,
    UserSerializer,
)


def _auth_payload(user) -> dict:
    return {"user": UserSerializer(user).data, **services.issue_tokens(user)}


class GoogleSignInView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "signin"

    @extend_schema(
        tags=["User Endpoints"],
        summary="Sign in with Google",
        description="Verifies a Google ID token, links or creates the account and returns a JWT pair.",
        request=GoogleSignInSerializer,
        responses={
            200: AuthResponseSerializer,
            400: OpenApiResponse(description="Invalid Google token"),
            502: OpenApiResponse(description="Google verification unavailable"),
        },
    )
    def post(self, request):
        serializer = GoogleSignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = services.sign_in_with_google(serializer.validated_data["token"])
        except ValidationError as e:
            log_auth_event("google", request, status="invalid_token")
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        except UpstreamError as e:
            log_auth_event("google", request, status="upstream_error")
            return Response({"detail": e.detail}, status=status.HTTP_502_BAD_GATEWAY)
        log_auth_event("google", request, user=user)
        return Response(_auth_payload(user))


class SignInView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "signin"

    @extend_schema(
        tags=["User Endpoints"],
        summary="Sign in with email and password",
        request=SignInSerializer,
        responses={200: AuthResponseSerializer, 401: OpenApiResponse(description="Invalid credentials")},
    )
    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = services.authenticate_identifier(
                serializer.validated_data["email"], serializer.validated_data["password"]
            )
        except (ValidationError, AuthorizationError) as e:
            log_auth_event("signin", request, status="failed")
            return Response({"detail": e.detail}, status=status.HTTP_401_UNAUTHORIZED)
        log_auth_event("signin", request, user=user)
        return Response(_auth_payload(user))


class AdminSignInView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "signin"

    @extend_schema(
        tags=["User Endpoints"],
        summary="Back office sign-in",
        description="Username and password sign-in restricted to staff accounts.",
        request=AdminSignInSerializer,
        responses={200: AuthResponseSerializer, 401: OpenApiResponse(description="Invalid credentials or not staff")},
    )
    def post(self, request):
        serializer = AdminSignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = services.authenticate_admin(
                serializer.validated_data["username"], serializer.validated_data["password"]
            )
        except AuthorizationError as e:
            log_auth_event("admin_signin", request, status="failed")
            return Response({"detail": e.detail}, status=status.HTTP_401_UNAUTHORIZED)
        log_auth_event("admin_signin", request, user=user)
        return Response(_auth_payload(user))


class RegisterView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "register"

    @extend_schema(
        tags=["User Endpoints"],
        summary="Register an account",
        request=RegistrationSerializer,
        responses={201: AuthResponseSerializer, 400: OpenApiResponse(description="Invalid data or user exists")},
    )
    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = services.register_user(**serializer.validated_data)
        except ValidationError as e:
            log_auth_event("register", request, status="invalid")
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("register", request, user=user)
        return Response(_auth_payload(user), status=status.HTTP_201_CREATED)


class SignOutView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "signout"

    @extend_schema(tags=["User Endpoints"], summary="Sign out", request=SignOutSerializer)
    def post(self, request):
        serializer = SignOutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            RefreshToken(serializer.validated_data["refresh"]).blacklist()
        except TokenError:
            log_auth_event("signout", request, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("signout", request)
        return Response({"detail": "Signed out."}, status=status.HTTP_205_RESET_CONTENT)


class RefreshView(TokenRefreshView):
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_refresh", request, status="success" if resp.status_code == 200 else "failed")
        return resp


class VerifyView(TokenVerifyView):
    throttle_scope = "token_verify"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_verify", request, status="success" if resp.status_code == 200 else "failed")
        return resp


class ProfileView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(tags=["User Endpoints"], summary="Get current user profile", responses={200: UserSerializer})
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        tags=["User Endpoints"],
        summary="Update current user profile",
        description=(
            "Empty values leave the stored value untouched. Changing the password requires "
            "`current_password`; a wrong current password yields 401."
        ),
        request=ProfileUpdateSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(description="Invalid data"),
            401: OpenApiResponse(description="Wrong current password"),
        },
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = services.update_profile(request.user, data=serializer.validated_data)
        except ValidationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        except AuthorizationError as e:
            log_auth_event("password_change", request, user=request.user, status="wrong_password")
            return Response({"detail": e.detail}, status=status.HTTP_401_UNAUTHORIZED)
        if serializer.validated_data.get("password"):
            log_auth_event("password_change", request, user=user)
        return Response(UserSerializer(user).data)

    put = patch


class WishlistView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(
        tags=["User Endpoints"],
        summary="List wishlist",
        responses={200: ProductSummarySerializer(many=True)},
    )
    def get(self, request):
        return Response(ProductSummarySerializer(selectors.wishlist_for(request.user), many=True).data)


class WishlistItemView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(
        tags=["User Endpoints"],
        summary="Add product to wishlist",
        responses={200: ProductSummarySerializer(many=True), 404: OpenApiResponse(description="Unknown product")},
    )
    def post(self, request, product_id: int):
        try:
            services.add_to_wishlist(request.user, product_id)
        except NotFoundError as e:
            return Response({"detail": e.detail}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSummarySerializer(selectors.wishlist_for(request.user), many=True).data)

    @extend_schema(
        tags=["User Endpoints"],
        summary="Remove product from wishlist",
        responses={200: ProductSummarySerializer(many=True)},
    )
    def delete(self, request, product_id: int):
        services.remove_from_wishlist(request.user, product_id)
        return Response(ProductSummarySerializer(selectors.wishlist_for(request.user), many=True).data)


@extend_schema(tags=["Admin Endpoints"], summary="List users (admin)")
class AdminUserListView(ListAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = UserSerializer
    throttle_scope = "profile"

    def get_queryset(self):
        return selectors.list_users()
