import json
import pytest

from blobsigner.cli import main


def _run(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


class TestCli:
    def test_azure_get(self, capsys):
        out = _run(capsys, "-p", "azureblob", "-i", "identity", "--secret", "aaaabbbb", "get", "container/name")
        assert out["method"] == "GET"
        assert out["url"].startswith("https://identity.blob.core.windows.net/container/name?sv=2017-04-17&se=")
        assert "&sr=b&sp=r&sig=" in out["url"]
        assert set(out["headers"]) == {"Date"}

    def test_s3_put_with_options(self, capsys):
        out = _run(
            capsys,
            "-p", "s3-v4", "-i", "AKIAEXAMPLE", "--secret", "secret",
            "-c", '{"region": "eu-west-1"}', "--expires", "60",
            "--content-length", "2", "--content-type", "text/plain",
            "-H", "x-amz-meta-owner: ops",
            "put", "bucket/key.txt",
        )
        assert out["method"] == "PUT"
        assert "X-Amz-Expires=60" in out["url"]
        assert "%2Feu-west-1%2F" in out["url"]
        assert out["headers"]["Content-Length"] == "2"
        assert out["headers"]["x-amz-meta-owner"] == "ops"

    def test_secret_from_env(self, capsys, monkeypatch):
        monkeypatch.setenv("BLOBSIGNER_SECRET_KEY", "aaaabbbb")
        out = _run(capsys, "-p", "azureblob", "-i", "identity", "delete", "container/name")
        assert "sp=d" in out["url"]

    def test_missing_secret(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-p", "azureblob", "-i", "identity", "get", "container/name"])
        assert exc.value.code == 1
        assert "secret is required" in capsys.readouterr().err

    def test_invalid_config_json(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-p", "s3", "-i", "id", "--secret", "s", "-c", "{bad", "get", "b/k"])
        assert exc.value.code == 1
        assert "Invalid --config JSON" in capsys.readouterr().err

    def test_invalid_duration(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-p", "azureblob", "-i", "identity", "--secret", "aaaabbbb", "--expires", "0", "get", "container/name"])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_key(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-p", "azureblob", "-i", "identity", "--secret", "***", "get", "container/name"])
        assert exc.value.code == 1
        assert "base64" in capsys.readouterr().err

    def test_unknown_provider_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["-p", "gcs", "-i", "identity", "--secret", "x", "get", "container/name"])
        assert exc.value.code == 2
