import json

from taskrunner.editors import EditorLocation, EditorTask, EditorTaskfile


def sample():
    return EditorTaskfile(
        tasks=[
            EditorTask(
                name="build",
                desc="Build it",
                summary="Builds everything",
                up_to_date=True,
                location=EditorLocation(line=3, column=5, taskfile="/work/Taskfile.yml"),
            )
        ],
        location="/work/Taskfile.yml",
    )


def test_to_dict_uses_json_field_names():
    assert sample().to_dict() == {
        "tasks": [
            {
                "name": "build",
                "desc": "Build it",
                "summary": "Builds everything",
                "up_to_date": True,
                "location": {"line": 3, "column": 5, "taskfile": "/work/Taskfile.yml"},
            }
        ],
        "location": "/work/Taskfile.yml",
    }


def test_missing_location_is_null():
    result = EditorTaskfile(tasks=[EditorTask(name="x")]).to_dict()
    assert result["tasks"][0]["location"] is None


def test_json_round_trip():
    data = sample().to_dict()
    assert json.loads(json.dumps(data)) == data