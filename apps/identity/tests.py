import json
from datetime import timedelta

import bcrypt
import jwt
from django.conf import settings
from django.test import TestCase, Client, override_settings

from .jwt_auth import create_session_token, decode_token, get_user_id_from_token
from .models import User
from .security import hash_password, verify_password
from .services import register_user


@override_settings(PASSWORD_HASH_ROUNDS=4)
class RegisterAPITest(TestCase):
    def setUp(self):
        self.client = Client()

    def post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type='application/json')

    def test_register_success(self):
        response = self.post('/register', {'email': 'a@a.com', 'password': 'password1'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'info': 'success'})
        self.assertTrue(User.objects.filter(email='a@a.com').exists())

    def test_register_duplicate_email(self):
        self.post('/register', {'email': 'a@a.com', 'password': 'password1'})
        response = self.post('/register', {'email': 'a@a.com', 'password': 'password2'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Email already exists'})
        self.assertEqual(User.objects.filter(email='a@a.com').count(), 1)

    def test_register_does_not_log_in(self):
        response = self.post('/register', {'email': 'a@a.com', 'password': 'password1'})
        self.assertNotIn('token', response.cookies)

    def test_password_is_stored_hashed(self):
        self.post('/register', {'email': 'a@a.com', 'password': 'password1'})
        user = User.objects.get(email='a@a.com')
        self.assertNotEqual(user.password, 'password1')
        self.assertTrue(user.password.startswith('$2'))
        self.assertTrue(verify_password('password1', user.password))

    def test_register_rejects_out_of_bounds_fields(self):
        cases = [
            {'email': 'a@b', 'password': 'password1'},
            {'email': 'x' * 31, 'password': 'password1'},
            {'email': 'a@a.com', 'password': 'short'},
            {'email': 'a@a.com', 'password': 'p' * 51},
            {'email': 'a@a.com'},
        ]
        for payload in cases:
            response = self.post('/register', payload)
            self.assertEqual(response.status_code, 400, payload)
            self.assertEqual(response.json()['error'], 'Validation failed')
        self.assertEqual(User.objects.count(), 0)

    def test_register_with_form_body(self):
        response = self.client.post('/register', {'email': 'b@b.com', 'password': 'password1'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'info': 'success'})
        self.assertTrue(User.objects.filter(email='b@b.com').exists())


@override_settings(PASSWORD_HASH_ROUNDS=4)
class LoginAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = register_user('a@a.com', 'password1')

    def post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type='application/json')

    def test_login_unknown_email(self):
        response = self.post('/login', {'email': 'b@b.com', 'password': 'password1'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Email does not exist'})
        self.assertNotIn('token', response.cookies)

    def test_login_wrong_password(self):
        response = self.post('/login', {'email': 'a@a.com', 'password': 'password2'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Password is incorrect'})
        self.assertNotIn('token', response.cookies)

    def test_login_rejects_out_of_bounds_fields(self):
        for payload in (
            {'email': 'a@a', 'password': 'password1'},
            {'email': 'a@a.com', 'password': 'p' * 51},
        ):
            response = self.post('/login', payload)
            self.assertEqual(response.status_code, 400, payload)
            self.assertEqual(response.json()['error'], 'Validation failed')
            self.assertNotIn('token', response.cookies)

    def test_login_with_form_body(self):
        response = self.client.post('/login', {'email': 'a@a.com', 'password': 'password1'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('token', response.cookies)

    def test_login_sets_http_only_token_cookie(self):
        response = self.post('/login', {'email': 'a@a.com', 'password': 'password1'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'info': 'success'})

        cookie = response.cookies['token']
        self.assertTrue(cookie['httponly'])

        payload = decode_token(cookie.value)
        self.assertEqual(payload['email'], 'a@a.com')
        self.assertEqual(payload['id'], self.user.id)

    def test_token_expires_after_24_hours(self):
        response = self.post('/login', {'email': 'a@a.com', 'password': 'password1'})
        payload = decode_token(response.cookies['token'].value)
        self.assertEqual(payload['exp'] - payload['iat'], 24 * 60 * 60)

    def test_login_cookie_grants_access_to_projects(self):
        self.post('/login', {'email': 'a@a.com', 'password': 'password1'})
        response = self.client.get('/projects')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])


class SessionTokenTest(TestCase):
    def test_round_trip(self):
        token = create_session_token(7, 'a@a.com')
        self.assertEqual(get_user_id_from_token(token), 7)

    def test_expired_token_is_rejected(self):
        with override_settings(SESSION_TOKEN_LIFETIME=timedelta(seconds=-1)):
            token = create_session_token(7, 'a@a.com')
        self.assertIsNone(decode_token(token))

    def test_foreign_signature_is_rejected(self):
        token = jwt.encode({'email': 'a@a.com', 'id': 7}, 'not-the-secret', algorithm='HS256')
        self.assertIsNone(get_user_id_from_token(token))

    def test_garbage_is_rejected(self):
        self.assertIsNone(get_user_id_from_token('not.a.token'))

    def test_token_without_id_is_rejected(self):
        token = jwt.encode({'email': 'a@a.com'}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        self.assertIsNone(get_user_id_from_token(token))


class PasswordHashTest(TestCase):
    @override_settings(PASSWORD_HASH_ROUNDS=10)
    def test_default_cost_factor(self):
        hashed = hash_password('password1')
        self.assertTrue(hashed.startswith('$2b$10$'))

    def test_accepts_hashes_from_other_bcrypt_implementations(self):
        # Node's bcrypt writes $2b$ hashes without any prefix
        legacy = bcrypt.hashpw(b'password1', bcrypt.gensalt(rounds=4)).decode()
        self.assertTrue(verify_password('password1', legacy))
        self.assertFalse(verify_password('password2', legacy))

    def test_non_bcrypt_value_never_matches(self):
        self.assertFalse(verify_password('password1', 'password1'))
