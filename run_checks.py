from fastapi.testclient import TestClient
from civic_reports.main import app

with TestClient(app) as client:
    print('ROOT:')
    print(client.get('/').json())

    print('\nHEALTH:')
    print(client.get('/health').json())

    print('\nSTORAGE HEALTH:')
    resp = client.get('/health/storage')
    print(resp.status_code)
    print(resp.json())

    print('\nREPORT STATS:')
    print(client.get('/reports/stats').json())
