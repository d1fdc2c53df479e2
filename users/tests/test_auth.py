from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase


class AuthFlowTests(APITestCase):
    def setUp(self):
        self.User = get_user_model()
        self.password = "StrongPass123!"
        self.user = self.User.objects.create_user(
            username="jdoe",
            email="jdoe@example.com",
            password=self.password,
            name="John Doe",
        )

    def test_signin_returns_user_and_tokens(self):
        resp = self.client.post(
            "/api/v1/auth/signin/",
            {"email": "JDoe@Example.com", "password": self.password},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIn("access", resp.data)
        self.assertIn("refresh", resp.data)
        self.assertEqual(resp.data["user"]["email"], "jdoe@example.com")
        self.assertFalse(resp.data["user"]["is_admin"])

    def test_signin_with_username(self):
        resp = self.client.post(
            "/api/v1/auth/signin/",
            {"email": "jdoe", "password": self.password},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_signin_wrong_password_is_401(self):
        resp = self.client.post(
            "/api/v1/auth/signin/",
            {"email": self.user.email, "password": "nope"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["detail"], "Invalid email or password.")

    def test_profile_requires_auth(self):
        resp = self.client.get("/api/v1/account/profile/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_profile_with_access_token(self):
        signin = self.client.post(
            "/api/v1/auth/signin/",
            {"email": self.user.email, "password": self.password},
            format="json",
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {signin.data['access']}")
        resp = self.client.get("/api/v1/account/profile/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["email"], self.user.email)
        self.assertEqual(resp.data["name"], "John Doe")

    def test_signout_blacklists_refresh(self):
        signin = self.client.post(
            "/api/v1/auth/signin/",
            {"email": self.user.email, "password": self.password},
            format="json",
        )
        refresh = signin.data["refresh"]
        resp = self.client.post("/api/v1/auth/signout/", {"refresh": refresh}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_205_RESET_CONTENT)
        resp2 = self.client.post("/api/v1/auth/refresh/", {"refresh": refresh}, format="json")
        self.assertEqual(resp2.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_signin_rejects_non_staff(self):
        resp = self.client.post(
            "/api/v1/auth/admin-signin/",
            {"username": "jdoe", "password": self.password},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.data["detail"], "Not authorized as admin.")

    def test_admin_signin_for_staff(self):
        self.user.is_staff = True
        self.user.save(update_fields=["is_staff"])
        resp = self.client.post(
            "/api/v1/auth/admin-signin/",
            {"username": "jdoe", "password": self.password},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.data["user"]["is_admin"])
