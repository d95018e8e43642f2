def test_full_student_lifecycle(client):
    """Интеграционный тест полного жизненного цикла студента"""

    # 1. Создаем студента
    create_response = client.post(
        "/api/students",
        json={"name": "Grace Hopper", "age": 35, "course": "Mathematics", "email": "Grace@Navy.mil"},
    )
    assert create_response.status_code == 201
    student = create_response.json()["data"]
    student_id = student["id"]
    assert student["email"] == "grace@navy.mil"
    assert student["grade"] == "C"

    # 2. Он есть в общем списке и в списке курса
    list_response = client.get("/api/students")
    assert list_response.status_code == 200
    assert any(s["id"] == student_id for s in list_response.json()["data"])

    course_response = client.get("/api/students/course/Mathematics")
    assert course_response.json()["count"] == 1

    # 3. Переводим на другой курс
    update_response = client.put(
        f"/api/students/{student_id}",
        json={"course": "Computer Science", "grade": "A"},
    )
    assert update_response.status_code == 200
    updated = update_response.json()["data"]
    assert updated["course"] == "Computer Science"
    assert updated["grade"] == "A"
    assert updated["email"] == "grace@navy.mil"

    assert client.get("/api/students/course/Mathematics").json()["count"] == 0
    assert client.get("/api/students/course/Computer Science").json()["count"] == 1

    # 4. Невалидное обновление ничего не меняет
    bad_response = client.put(f"/api/students/{student_id}", json={"age": 10, "name": "G"})
    assert bad_response.status_code == 400
    assert bad_response.json()["errors"] == [
        "Name must be at least 2 characters long",
        "Age must be at least 16",
    ]
    assert client.get(f"/api/students/{student_id}").json()["data"] == updated

    # 5. Удаляем
    delete_response = client.delete(f"/api/students/{student_id}")
    assert delete_response.status_code == 200

    assert client.get(f"/api/students/{student_id}").status_code == 404
    assert client.get("/api/students").json()["count"] == 0

    # 6. После удаления email снова свободен
    recreate_response = client.post(
        "/api/students",
        json={"name": "Grace Hopper", "age": 35, "course": "Mathematics", "email": "grace@navy.mil"},
    )
    assert recreate_response.status_code == 201
    assert recreate_response.json()["data"]["id"] != student_id
