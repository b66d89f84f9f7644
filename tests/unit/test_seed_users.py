import json

import seed_users


def test_seed_memory_backend_writes_created_users(tmp_path, capsys):
    out = tmp_path / "seeded.jsonl"
    code = seed_users.main(
        ["--backend", "memory", "--count", "3", "--rounds", "4", "--prefix", "demo", "--out", str(out)]
    )

    assert code == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    users = [json.loads(line) for line in lines]
    assert [u["user_name"] for u in users] == ["demo0", "demo1", "demo2"]
    assert all("password" not in u for u in users)
    assert "CREATED: 3/3 users (0 skipped)" in capsys.readouterr().out


def test_seed_reports_policy_violations(capsys):
    code = seed_users.main(["--backend", "memory", "--count", "2", "--rounds", "4", "--password", "weak"])

    assert code == 0
    output = capsys.readouterr().out
    assert "skip demo0: Password must be at least 8 characters in length" in output
    assert "CREATED: 0/2 users (2 skipped)" in output
