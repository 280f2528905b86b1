"""
BugSnacks - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from faker import Faker

# Set testing environment before the app reads its settings
os.environ['TESTING'] = 'true'
os.environ['DOCUMENT_STORE'] = 'memory'
os.environ['LOG_LEVEL'] = 'WARNING'
os.environ.pop('LOG_FILE', None)

from bugsnacks.main import app
from bugsnacks.core.store import InMemoryDocumentStore, get_store

fake = Faker()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store for each test"""
    return InMemoryDocumentStore()


@pytest.fixture
async def client(store: InMemoryDocumentStore) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the store dependency overridden"""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def reward_data() -> dict:
    return {
        'name': 'Norris Center at northwestern1',
        'location': 'Norris Center',
        'type': 'GUEST_SWIPE',
    }


@pytest.fixture
def user_data() -> dict:
    return {
        'name': fake.name(),
        'email': f'{fake.user_name()}@u.northwestern.edu',
        'campusId': 'northwestern1',
    }


@pytest.fixture
def project_data() -> dict:
    return {
        'name': 'Demo',
        'userId': 'u1',
        'description': 'd',
        'campusId': 'c1',
    }


@pytest.fixture
async def project_id(client: AsyncClient, project_data: dict) -> str:
    """A stored project"""
    response = await client.post('/api/projects/', json=project_data)
    assert response.status_code == 201
    return response.json()['projectId']


@pytest.fixture
def test_request_data(project_id: str, reward_data: dict) -> dict:
    return {
        'projectId': project_id,
        'developerId': 'u1',
        'title': 'Try the checkout flow',
        'description': fake.sentence(),
        'demoUrl': 'https://demo.example.edu',
        'reward': reward_data,
        'status': 'OPEN',
    }


@pytest.fixture
async def test_request_id(client: AsyncClient, test_request_data: dict) -> str:
    """A stored test request"""
    response = await client.post('/api/test-requests/', json=test_request_data)
    assert response.status_code == 201
    return response.json()['requestId']


@pytest.fixture
def bug_report_data(test_request_id: str) -> dict:
    return {
        'requestId': test_request_id,
        'testerId': 'tester1',
        'title': 'Checkout button does nothing',
        'description': '1. Add item 2. Press checkout 3. Nothing happens',
        'severity': 'HIGH',
        'attachments': ['BugAttachments/screenshot.png'],
        'video': 'BugVideos/repro.mp4',
    }
