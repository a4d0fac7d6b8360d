"""
Integration tests for project and task endpoints.
Tests session enforcement, owner scoping and response shapes.
"""
import json
from datetime import timedelta

from django.test import TestCase, Client, override_settings

from apps.identity.jwt_auth import create_session_token
from apps.identity.services import register_user
from apps.projects.models import Project, Task


@override_settings(PASSWORD_HASH_ROUNDS=4)
class ProjectsTestCase(TestCase):
    """Two registered users, each with a client carrying their session cookie."""

    def setUp(self):
        self.alice = register_user('alice@test.com', 'password1')
        self.bob = register_user('bob@test.com', 'password1')

        self.client = self.client_for(self.alice)
        self.bob_client = self.client_for(self.bob)

    @staticmethod
    def client_for(user, **kwargs):
        client = Client(**kwargs)
        client.cookies['token'] = create_session_token(user.id, user.email)
        return client

    @staticmethod
    def post(client, path, payload):
        return client.post(path, data=json.dumps(payload), content_type='application/json')


class SessionRequiredTest(ProjectsTestCase):
    """Test that every project route requires a valid session cookie."""

    def test_requests_without_cookie_are_unauthorized(self):
        project = Project.objects.create(name='Garden', userid=self.alice.id)
        anonymous = Client()
        requests = [
            anonymous.get('/projects'),
            self.post(anonymous, '/projects', {'name': 'Kitchen'}),
            anonymous.delete(f'/projects/{project.id}'),
            anonymous.get(f'/projects/{project.id}/tasks'),
            self.post(anonymous, f'/projects/{project.id}/tasks', {'name': 'Dig'}),
            anonymous.patch(f'/projects/{project.id}/tasks/1'),
        ]
        for response in requests:
            self.assertEqual(response.status_code, 401)
            self.assertEqual(response.json(), {'error': 'Unauthorized'})

        # No side effects
        self.assertEqual(Project.objects.count(), 1)
        self.assertEqual(Task.objects.count(), 0)

    def test_expired_cookie_is_unauthorized(self):
        with override_settings(SESSION_TOKEN_LIFETIME=timedelta(seconds=-1)):
            client = self.client_for(self.alice)
        response = client.get('/projects')
        self.assertEqual(response.status_code, 401)

    def test_tampered_cookie_is_unauthorized(self):
        client = Client()
        client.cookies['token'] = create_session_token(self.alice.id, self.alice.email) + 'x'
        response = client.get('/projects')
        self.assertEqual(response.status_code, 401)

    def test_auth_is_checked_before_body_validation(self):
        response = self.post(Client(), '/projects', {'name': 'x'})
        self.assertEqual(response.status_code, 401)


class ProjectAPITest(ProjectsTestCase):
    """Test project listing, creation and deletion."""

    def test_list_projects_empty(self):
        response = self.client.get('/projects')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_create_project_returns_full_list(self):
        self.post(self.client, '/projects', {'name': 'Garden', 'topic': 'outdoor'})
        response = self.post(self.client, '/projects', {'name': 'Kitchen'})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([p['name'] for p in data], ['Garden', 'Kitchen'])
        self.assertEqual(data[0]['topic'], 'outdoor')
        self.assertIsNone(data[1]['topic'])
        self.assertEqual({p['userid'] for p in data}, {self.alice.id})
        self.assertEqual(set(data[0]), {'id', 'name', 'topic', 'userid'})

    def test_create_project_with_form_body(self):
        response = self.client.post('/projects', {'name': 'Garden'})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([p['name'] for p in data], ['Garden'])
        self.assertIsNone(data[0]['topic'])

    def test_create_project_validation(self):
        cases = [
            {},
            {'name': 'abc'},
            {'name': 'n' * 31},
            {'name': 'Garden', 'topic': 'abc'},
            {'name': 'Garden', 'topic': 't' * 21},
        ]
        for payload in cases:
            response = self.post(self.client, '/projects', payload)
            self.assertEqual(response.status_code, 400, payload)
        self.assertEqual(Project.objects.count(), 0)

    def test_projects_are_scoped_to_owner(self):
        self.post(self.client, '/projects', {'name': 'Alice project'})

        response = self.bob_client.get('/projects')
        self.assertEqual(response.json(), [])

        response = self.post(self.bob_client, '/projects', {'name': 'Bob project'})
        self.assertEqual([p['name'] for p in response.json()], ['Bob project'])

    def test_delete_own_project(self):
        project = Project.objects.create(name='Garden', userid=self.alice.id)
        Task.objects.create(project=project, name='Dig')

        response = self.client.delete(f'/projects/{project.id}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'info': 'success'})
        self.assertFalse(Project.objects.filter(id=project.id).exists())
        self.assertEqual(Task.objects.count(), 0)

    def test_delete_foreign_project_is_silently_ignored(self):
        project = Project.objects.create(name='Garden', userid=self.alice.id)

        response = self.bob_client.delete(f'/projects/{project.id}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'info': 'success'})
        self.assertTrue(Project.objects.filter(id=project.id).exists())

    def test_delete_missing_project_succeeds(self):
        response = self.client.delete('/projects/9999')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'info': 'success'})


class TaskAPITest(ProjectsTestCase):
    """Test task listing, creation and completion toggling."""

    def setUp(self):
        super().setUp()
        self.project = Project.objects.create(name='Garden', userid=self.alice.id)

    def tasks_url(self, project=None):
        return f'/projects/{(project or self.project).id}/tasks'

    def test_list_tasks(self):
        Task.objects.create(project=self.project, name='Dig')
        other = Project.objects.create(name='Kitchen', userid=self.alice.id)
        Task.objects.create(project=other, name='Cook')

        response = self.client.get(self.tasks_url())
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([t['name'] for t in data], ['Dig'])
        self.assertEqual(set(data[0]), {'id', 'name', 'deadline', 'iscompleted', 'projectid'})
        self.assertEqual(data[0]['projectid'], self.project.id)
        self.assertFalse(data[0]['iscompleted'])

    def test_create_task_returns_full_list(self):
        self.post(self.client, self.tasks_url(), {'name': 'Dig'})
        response = self.post(self.client, self.tasks_url(), {'name': 'Plant', 'deadline': '2026-05-01'})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([t['name'] for t in data], ['Dig', 'Plant'])
        self.assertIsNone(data[0]['deadline'])
        self.assertEqual(data[1]['deadline'], '2026-05-01')

    def test_create_task_with_urlencoded_body(self):
        response = self.client.post(
            self.tasks_url(),
            data='name=Dig&deadline=2026-05-01',
            content_type='application/x-www-form-urlencoded',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]['deadline'], '2026-05-01')

    def test_create_task_requires_name(self):
        response = self.post(self.client, self.tasks_url(), {'deadline': '2026-05-01'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(Task.objects.count(), 0)

    def test_foreign_project_is_forbidden_with_plain_text(self):
        Task.objects.create(project=self.project, name='Dig')
        task = Task.objects.get()
        requests = [
            self.bob_client.get(self.tasks_url()),
            self.post(self.bob_client, self.tasks_url(), {'name': 'Sneaky'}),
            self.bob_client.patch(f'{self.tasks_url()}/{task.id}'),
        ]
        for response in requests:
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.content, b'Go away')
            self.assertTrue(response['Content-Type'].startswith('text/plain'))

        task.refresh_from_db()
        self.assertFalse(task.iscompleted)
        self.assertEqual(Task.objects.count(), 1)

    def test_missing_project_is_forbidden(self):
        response = self.client.get('/projects/9999/tasks')
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.content, b'Go away')

    def test_toggle_flips_only_the_target(self):
        first = Task.objects.create(project=self.project, name='Dig')
        second = Task.objects.create(project=self.project, name='Plant', iscompleted=True)
        third = Task.objects.create(project=self.project, name='Water')

        response = self.client.patch(f'{self.tasks_url()}/{first.id}')
        self.assertEqual(response.status_code, 200)
        flags = {t['id']: t['iscompleted'] for t in response.json()}
        self.assertEqual(flags, {first.id: True, second.id: True, third.id: False})

    def test_toggle_twice_restores_state(self):
        task = Task.objects.create(project=self.project, name='Dig')
        url = f'{self.tasks_url()}/{task.id}'

        self.client.patch(url)
        response = self.client.patch(url)
        self.assertEqual(response.status_code, 200)
        task.refresh_from_db()
        self.assertFalse(task.iscompleted)

    def test_toggle_task_from_other_project_fails(self):
        other = Project.objects.create(name='Kitchen', userid=self.alice.id)
        task = Task.objects.create(project=other, name='Cook')
        client = self.client_for(self.alice, raise_request_exception=False)

        response = client.patch(f'{self.tasks_url()}/{task.id}')
        self.assertEqual(response.status_code, 500)
        task.refresh_from_db()
        self.assertFalse(task.iscompleted)

    def test_toggle_missing_task_is_a_server_error(self):
        client = self.client_for(self.alice, raise_request_exception=False)
        response = client.patch(f'{self.tasks_url()}/9999')
        self.assertEqual(response.status_code, 500)
