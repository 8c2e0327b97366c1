import tempfile
import unittest

from fastapi.testclient import TestClient

from marathon.api.api_run import create_app
from marathon.utilities.security import hash_password, verify_password


class TestAuthAPI(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.app = create_app(self._tmp.name)
        self.client = TestClient(self.app)

    def tearDown(self):
        self.client.close()
        self._tmp.cleanup()

    def _register(self, client=None, email='erin@example.com', password='secret123'):
        return (client or self.client).post('/api/auth/register', json={
            'name': 'Erin', 'email': email, 'password': password,
        })

    def test_register_signs_in(self):
        resp = self._register()
        self.assertEqual(resp.status_code, 201)
        user = resp.json()['user']
        self.assertEqual(user['email'], 'erin@example.com')
        self.assertNotIn('password_hash', user)
        me = self.client.get('/api/auth/user')
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()['user']['id'], user['id'])

    def test_duplicate_email_rejected(self):
        self._register()
        resp = self._register(client=TestClient(self.app), email='ERIN@example.com')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['message'], 'User already exists')

    def test_register_validation(self):
        resp = self._register(password='short')
        self.assertEqual(resp.status_code, 400)
        resp = self._register(email='not-an-email')
        self.assertEqual(resp.status_code, 400)

    def test_login_and_logout(self):
        self._register()
        client = TestClient(self.app)
        self.assertEqual(client.get('/api/auth/user').status_code, 401)

        bad = client.post('/api/auth/login', json={'email': 'erin@example.com', 'password': 'wrong-one'})
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(bad.json()['message'], 'Invalid email or password')

        ok = client.post('/api/auth/login', json={'email': 'Erin@Example.com', 'password': 'secret123'})
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(client.get('/api/plans').status_code, 200)

        self.assertEqual(client.post('/api/auth/logout').status_code, 200)
        resp = client.get('/api/auth/user')
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()['message'], 'Not authenticated')

    def test_unknown_email(self):
        resp = self.client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'x'})
        self.assertEqual(resp.status_code, 401)


class TestPasswordHashing(unittest.TestCase):

    def test_hash_and_verify(self):
        digest, salt = hash_password('secret123')
        self.assertTrue(verify_password('secret123', digest, salt))
        self.assertFalse(verify_password('secret124', digest, salt))

    def test_salt_differs_per_call(self):
        self.assertNotEqual(hash_password('same')[1], hash_password('same')[1])


if __name__ == '__main__':
    unittest.main()
