"""
Smoke check: submit, triage and track one complaint against an in-memory store.

Usage: python run_checks.py
"""

from fastapi.testclient import TestClient

from complaint_tracker.main import app
from complaint_tracker.services.complaint_service import ComplaintService, set_complaint_service
from complaint_tracker.services.storage import MemoryBackend
from complaint_tracker.services.storage_service import StorageService

set_complaint_service(ComplaintService(storage=StorageService(backend=MemoryBackend())))

with TestClient(app) as client:
    print('HEALTH:')
    print(client.get('/health/storage').json())

    print('\nSUBMIT:')
    resp = client.post('/complaints', json={
        'title': 'Streetlight flickering near bus stop',
        'description': 'The streetlight next to the Park Avenue bus stop flickers all night.',
        'category': 'Utilities',
        'priority': 'Medium',
        'reporterName': 'Check Runner',
        'reporterEmail': 'checks@example.com',
    })
    print(resp.status_code)
    complaint_id = resp.json().get('id')
    print(complaint_id)

    print('\nTRIAGE:')
    resp = client.patch(f'/admin/complaints/{complaint_id}/status', json={'status': 'In Review'})
    print(resp.status_code, resp.json().get('status'))

    print('\nTRACK:')
    tracked = client.get(f'/complaints/{complaint_id}').json()
    print(tracked['status'], tracked['reporter']['email'])

    print('\nANALYTICS:')
    print(client.get('/analytics').json())
