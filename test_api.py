"""
Tests for the Flask API
"""


def post(client, url, **payload):
    response = client.post(url, json=payload)
    return response.status_code, response.get_json()


def test_api_info(client):
    response = client.get('/api')
    assert response.status_code == 200
    assert b"API Server" in response.data


def test_state(client):
    response = client.get('/api/state')
    body = response.get_json()
    assert response.status_code == 200
    assert body['success'] is True
    assert body['data']['display'] == "0"
    assert body['data']['history'] == "0"


def test_button_flow_is_logged(client):
    post(client, '/api/digit', digit="7")
    post(client, '/api/operate', button="+")
    post(client, '/api/digit', digit="3")
    status, body = post(client, '/api/operate', button="=")
    assert status == 200
    assert body['data']['display'] == "10"
    assert body['data']['history'] == "7 + 3 ="

    body = client.get('/api/calculations').get_json()
    assert body['count'] == 1
    assert body['data'][0]['expression'] == "7 + 3 ="
    assert body['data'][0]['result'] == "10"

    assert client.delete('/api/calculations').get_json()['success'] is True
    assert client.get('/api/calculations').get_json()['count'] == 0


def test_undo_and_clear(client):
    post(client, '/api/digit', digit="4")
    post(client, '/api/digit', digit="2")
    status, body = post(client, '/api/undo')
    assert body['data']['display'] == "4"
    post(client, '/api/clear')
    status, body = post(client, '/api/clear')
    assert status == 200
    assert body['data']['display'] == "0"
    assert body['data']['typing'] is False


def test_decimal_and_sign(client):
    post(client, '/api/digit', digit="1")
    post(client, '/api/decimal')
    post(client, '/api/digit', digit="5")
    status, body = post(client, '/api/sign')
    assert body['data']['display'] == "-1.5"
    status, body = post(client, '/api/negate')
    assert body['data']['display'] == "1.5"


def test_memory(client):
    post(client, '/api/digit', digit="6")
    post(client, '/api/memory', function="MS")
    status, body = post(client, '/api/memory', function="M+")
    assert body['data']['memory'] == 12
    assert body['data']['display'] == "12"


def test_apply_with_variables(client):
    status, body = post(client, '/api/variables', name="x", value=5)
    assert status == 200
    assert body['data'] == {'name': "x", 'value': 5.0}

    post(client, '/api/apply', button="+", operand=2)
    status, body = post(client, '/api/apply', button="=", operand="x")
    assert status == 200
    assert body['data']['result'] == 7
    assert body['data']['history'] == "2 + x ="
    assert [c['kind'] for c in body['data']['commands']] == ['binary', 'equals']

    assert client.get('/api/variables').get_json()['data'] == {'x': 5.0}


def test_store_and_recall_variable(client):
    post(client, '/api/digit', digit="9")
    status, body = post(client, '/api/variables', name="rate")
    assert body['data']['value'] == 9
    status, body = post(client, '/api/variables/rate/recall')
    assert body['data']['display'] == "rate"


def test_bad_requests(client):
    assert post(client, '/api/digit', digit="x")[0] == 400
    assert post(client, '/api/digit')[0] == 400
    assert post(client, '/api/operate')[0] == 400
    assert post(client, '/api/memory', function="M*")[0] == 400
    assert post(client, '/api/apply', button="+")[0] == 400
    assert post(client, '/api/variables', name="x", value="abc")[0] == 400
    assert post(client, '/api/variables', value=1)[0] == 400
    assert client.get('/api/calculations?limit=abc').status_code == 400

    status, body = post(client, '/api/operate')
    assert body['success'] is False
    assert "button" in body['error']


def test_shared_session_sees_api_presses(session):
    import threading
    from api import create_app

    lock = threading.Lock()
    app = create_app(session=session, lock=lock)
    client = app.test_client()

    post(client, '/api/digit', digit="4")
    post(client, '/api/operate', button="+")
    post(client, '/api/digit', digit="3")
    post(client, '/api/operate', button="=")

    assert app.config['CALC_SESSION'] is session
    assert app.config['SESSION_LOCK'] is lock
    assert app.config['HISTORY_MANAGER'] is session.history_manager
    assert session.display == "7"
    assert session.history_manager.get_calculation_history()[0][:2] == ("4 + 3 =", "7")


def test_api_server_thread_serves_and_stops(session):
    import json
    import urllib.request
    from api import ApiServer, create_app

    session.enter_digit("8")
    server = ApiServer(create_app(session=session), host='127.0.0.1', port=0)
    assert server.port > 0
    server.start()
    try:
        url = f"http://127.0.0.1:{server.port}/api/state"
        with urllib.request.urlopen(url, timeout=5) as response:
            body = json.load(response)
        assert body['data']['display'] == "8"
    finally:
        server.stop()
    server.join(timeout=5)
    assert not server.is_alive()


def test_local_ip_falls_back_and_closes_socket(monkeypatch):
    import pytest
    pytest.importorskip("tkinter")
    import socket
    import calcstack

    opened = []

    class UnroutableSocket:
        def __init__(self, *args):
            self.closed = False
            opened.append(self)

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self.closed = True

        def connect(self, address):
            raise OSError("Network is unreachable")

    monkeypatch.setattr(socket, "socket", UnroutableSocket)
    assert calcstack.get_local_ip() == '127.0.0.1'
    assert len(opened) == 1 and opened[0].closed
