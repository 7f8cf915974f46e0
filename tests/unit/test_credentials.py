"""Unit tests for Credential and relationship parsing."""

import pytest

from platformsh_config.credentials import Credential, parse_relationships
from platformsh_config.errors import DecodeError


class TestCredential:
    def test_from_dict(self):
        credential = Credential.from_dict(
            {
                "host": "database.internal",
                "username": "user",
                "password": "secret",
                "ip": "169.254.10.1",
                "path": "main",
                "scheme": "mysql",
                "port": 3306,
                "query": {"is_master": True},
                "rel": "mysql",
                "service": "db",
            }
        )

        assert credential == Credential(
            host="database.internal",
            username="user",
            password="secret",
            ip="169.254.10.1",
            path="main",
            scheme="mysql",
            port=3306,
            is_master=True,
        ), "Known members should be mapped and unknown members ignored"

    def test_missing_members_take_zero_values(self):
        credential = Credential.from_dict({})

        assert credential == Credential()
        assert credential.port == 0
        assert credential.is_master is False

    def test_null_members_take_zero_values(self):
        credential = Credential.from_dict({"username": None, "port": None, "query": None})

        assert credential.username == ""
        assert credential.port == 0
        assert credential.is_master is False

    @pytest.mark.parametrize(
        "data",
        [
            {"port": "3306"},
            {"port": True},
            {"host": 1},
            {"query": ["is_master"]},
            {"query": {"is_master": "false"}},
            {"query": {"is_master": 0}},
        ],
    )
    def test_wrong_member_types_rejected(self, data):
        with pytest.raises(TypeError):
            Credential.from_dict(data)

    def test_frozen(self):
        credential = Credential(host="h")

        with pytest.raises(AttributeError):
            credential.host = "other"

    def test_repr_hides_password(self):
        credential = Credential(username="user", password="hunter2")

        assert "hunter2" not in repr(credential), "Password must not leak into logs"
        assert "user" in repr(credential)

    def test_to_dict_nests_query(self):
        data = Credential(host="h", port=1, is_master=True).to_dict()

        assert data["query"] == {"is_master": True}
        assert "is_master" not in data


class TestParseRelationships:
    def test_empty_document(self):
        assert dict(parse_relationships("PLATFORM_RELATIONSHIPS", {})) == {}

    def test_null_endpoint_list(self):
        assert parse_relationships("PLATFORM_RELATIONSHIPS", {"db": None})["db"] == ()

    def test_endpoint_must_be_object(self):
        with pytest.raises(DecodeError, match=r"endpoint db\[1\] must be an object"):
            parse_relationships("PLATFORM_RELATIONSHIPS", {"db": [{}, "host"]})

    def test_bad_member_reported_with_position(self):
        with pytest.raises(DecodeError, match=r"endpoint db\[0\]: 'port' must be an integer"):
            parse_relationships("PLATFORM_RELATIONSHIPS", {"db": [{"port": "x"}]})

    def test_string_is_master_rejected(self):
        document = {"db": [{"host": "h", "port": 1, "query": {"is_master": "false"}}]}

        with pytest.raises(DecodeError, match=r"endpoint db\[0\]: 'is_master' must be a boolean"):
            parse_relationships("PLATFORM_RELATIONSHIPS", document)

    def test_top_level_must_be_object(self):
        with pytest.raises(DecodeError, match="got list"):
            parse_relationships("PLATFORM_RELATIONSHIPS", [])
