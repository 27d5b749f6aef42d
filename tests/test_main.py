def test_read_main(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the Course Tuition API! Visit /docs for API documentation."}


def test_data_endpoint_empty(client):
    response = client.get("/api/v1/data")
    assert response.status_code == 200
    assert response.json() == {"students": [], "courses": [], "payments": []}
