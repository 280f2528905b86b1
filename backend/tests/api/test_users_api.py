"""
API Tests for /api/users
"""
import pytest
from httpx import AsyncClient

from bugsnacks.core.store import InMemoryDocumentStore


class TestUserCreation:
    """Test POST /api/users/"""

    @pytest.mark.asyncio
    async def test_create_user(self, client: AsyncClient, user_data: dict, store: InMemoryDocumentStore):
        """Test users are stored in the users collection"""
        response = await client.post('/api/users/', json=user_data)

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'User created successfully'
        stored = await store.get('users', data['userId'])
        assert stored['email'] == user_data['email']
        assert stored['campusId'] == 'northwestern1'
        assert await store.get('projects', data['userId']) is None

    @pytest.mark.asyncio
    async def test_create_then_get(self, client: AsyncClient, user_data: dict):
        created = await client.post('/api/users/', json=user_data)
        user_id = created.json()['userId']

        response = await client.get(f'/api/users/{user_id}')

        assert response.status_code == 200
        data = response.json()
        assert data['userId'] == user_id
        assert data['name'] == user_data['name']
        assert data['email'] == user_data['email']
        assert 'createdAt' in data

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, client: AsyncClient, user_data: dict):
        response = await client.post('/api/users/', json={**user_data, 'email': 'nope'})

        assert response.status_code == 400
        assert response.json()['issues'][0]['path'] == '$input.email'


class TestUserOperations:
    """Test read, update and delete"""

    @pytest.mark.asyncio
    async def test_greeting(self, client: AsyncClient):
        response = await client.get('/api/users/')

        assert response.text == 'Hello Users!'

    @pytest.mark.asyncio
    async def test_get_nonexistent(self, client: AsyncClient):
        response = await client.get('/api/users/ghost')

        assert response.status_code == 404
        assert response.json() == {'error': 'User not found'}

    @pytest.mark.asyncio
    async def test_update_user(self, client: AsyncClient, user_data: dict):
        created = await client.post('/api/users/', json=user_data)
        user_id = created.json()['userId']

        response = await client.patch(f'/api/users/{user_id}', json={'name': 'Renamed'})

        assert response.status_code == 200
        assert response.json() == {'message': 'User updated successfully'}
        data = (await client.get(f'/api/users/{user_id}')).json()
        assert data['name'] == 'Renamed'
        assert data['email'] == user_data['email']

    @pytest.mark.asyncio
    async def test_patch_null_email_rejected(self, client: AsyncClient, user_data: dict):
        created = await client.post('/api/users/', json=user_data)
        user_id = created.json()['userId']

        response = await client.patch(f'/api/users/{user_id}', json={'email': None})

        assert response.status_code == 400
        assert response.json()['issues'][0]['path'] == '$input.email'
        assert (await client.get(f'/api/users/{user_id}')).json()['email'] == user_data['email']

    @pytest.mark.asyncio
    async def test_update_nonexistent(self, client: AsyncClient):
        response = await client.patch('/api/users/ghost', json={'name': 'x'})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_user(self, client: AsyncClient, user_data: dict):
        created = await client.post('/api/users/', json=user_data)
        user_id = created.json()['userId']

        response = await client.delete(f'/api/users/{user_id}')

        assert response.status_code == 200
        assert response.json() == {'message': 'User deleted successfully'}
        assert (await client.get(f'/api/users/{user_id}')).status_code == 404


class TestUserRelationships:
    """Test projects and bug reports owned by a user"""

    @pytest.mark.asyncio
    async def test_user_projects(self, client: AsyncClient, project_data: dict):
        mine = await client.post('/api/projects/', json={**project_data, 'userId': 'dev42'})
        await client.post('/api/projects/', json={**project_data, 'userId': 'someone-else'})

        response = await client.get('/api/users/dev42/projects')

        assert response.status_code == 200
        data = response.json()
        assert [p['id'] for p in data] == [mine.json()['projectId']]
        assert data[0]['developerId'] == 'dev42'

    @pytest.mark.asyncio
    async def test_user_without_projects(self, client: AsyncClient):
        response = await client.get('/api/users/nobody/projects')

        assert response.status_code == 404
        assert response.json() == {'error': 'No projects found for this user'}

    @pytest.mark.asyncio
    async def test_user_bug_reports(self, client: AsyncClient, bug_report_data: dict):
        created = await client.post('/api/bug-reports/', json=bug_report_data)

        response = await client.get('/api/users/tester1/bugReports')

        assert response.status_code == 200
        data = response.json()
        assert [b['id'] for b in data] == [created.json()['reportId']]
        assert data[0]['testerId'] == 'tester1'

    @pytest.mark.asyncio
    async def test_user_without_bug_reports(self, client: AsyncClient):
        response = await client.get('/api/users/nobody/bugReports')

        assert response.status_code == 404
        assert response.json() == {'error': 'No bug reports found for this user'}
