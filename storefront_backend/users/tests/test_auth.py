from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient, APIRequestFactory

from orders.models import Address
from users.permissions import IsAdmin, IsCustomer

User = get_user_model()


class AuthFlowTests(TestCase):
    """
    Register / login / me.

    GUARANTEES:
    - Sign-up always creates a customer
    - Login returns a usable JWT pair
    - Bad credentials never leak which part was wrong
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_creates_customer(self):
        response = self.client.post(
            "/api/auth/register/",
            {
                "email": "Ada@Example.com",
                "password": "s3cure-pass",
                "first_name": "Ada",
                "last_name": "Obi",
                "role": "admin",
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        user = User.objects.get(email__iexact="ada@example.com")
        self.assertEqual(user.role, User.ROLE_CUSTOMER)
        self.assertFalse(user.is_staff)

    def test_register_rejects_duplicate_email(self):
        User.objects.create_user(email="dup@example.com", password="pass12345")

        response = self.client.post(
            "/api/auth/register/",
            {"email": "DUP@example.com", "password": "another-pass"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)

    def test_login_returns_tokens_and_me_works(self):
        User.objects.create_user(email="shopper@example.com", password="pass12345")

        response = self.client.post(
            "/api/auth/login/",
            {"email": "shopper@example.com", "password": "pass12345"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get("/api/auth/me/")

        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data["user"]["email"], "shopper@example.com")

    def test_login_with_wrong_password(self):
        User.objects.create_user(email="shopper@example.com", password="pass12345")

        response = self.client.post(
            "/api/auth/login/",
            {"email": "shopper@example.com", "password": "wrong"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Invalid email or password")

    def test_me_requires_authentication(self):
        response = self.client.get("/api/auth/me/")
        self.assertEqual(response.status_code, 401)


class RolePermissionTests(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass", role=User.ROLE_ADMIN
        )
        self.customer = User.objects.create_user(email="customer@example.com", password="pass")

    def _request_for(self, user):
        request = self.factory.get("/")
        request.user = user
        return request

    def test_admin_role(self):
        request = self._request_for(self.admin)
        self.assertTrue(IsAdmin().has_permission(request, None))
        self.assertFalse(IsCustomer().has_permission(request, None))

    def test_customer_role(self):
        request = self._request_for(self.customer)
        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertTrue(IsCustomer().has_permission(request, None))


class ProfileTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="ada@example.com", password="pass12345", first_name="Ada", last_name="Obi"
        )
        self.client.force_authenticate(self.user)

    def test_register_signs_in(self):
        client = APIClient()
        response = client.post(
            "/api/auth/register/",
            {"email": "new@example.com", "password": "s3cure-pass-123"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertIn("access", response.data)
        self.assertEqual(response.data["user"]["role"], User.ROLE_CUSTOMER)

    def test_me_without_orders(self):
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.data["user"]["full_name"], "Ada Obi")
        self.assertEqual(response.data["orderCount"], 0)
        self.assertIsNone(response.data["lastShippingAddress"])

    def test_me_prefills_last_address(self):
        Address.objects.create(
            user=self.user, first_name="Ada", last_name="Obi", street="1 Old Road", city="Ikeja", state="Lagos"
        )
        Address.objects.create(
            user=self.user, first_name="Ada", last_name="Obi", street="2 New Road", city="Yaba", state="Lagos"
        )

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.data["lastShippingAddress"]["street"], "2 New Road")

    def test_patch_name(self):
        response = self.client.patch("/api/auth/me/", {"first_name": "  Adaeze "}, format="json")

        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Adaeze")
        self.assertEqual(self.user.last_name, "Obi")

    def test_patch_cannot_change_role(self):
        self.client.patch("/api/auth/me/", {"role": "admin"}, format="json")

        self.user.refresh_from_db()
        self.assertEqual(self.user.role, User.ROLE_CUSTOMER)
