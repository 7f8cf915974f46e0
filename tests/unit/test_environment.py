"""Unit tests for environment readers."""

import os

from platformsh_config.environment import (
    EnvironmentReader,
    MappingEnvironmentReader,
    OsEnvironmentReader,
    as_reader,
)
from platformsh_config.injection import get_platform_service


class TestMappingEnvironmentReader:
    def test_present_and_absent(self):
        reader = MappingEnvironmentReader({"A": "1"})

        assert reader.get("A") == "1"
        assert reader.get("B") == "", "Unset variables read as ''"

    def test_callable(self):
        assert MappingEnvironmentReader({"A": "1"})("A") == "1"

    def test_snapshot_is_copied(self):
        values = {"A": "1"}
        reader = MappingEnvironmentReader(values)
        values["A"] = "2"

        assert reader.get("A") == "1", "Later changes to the source must not leak in"

    def test_none_values_read_as_empty(self):
        assert MappingEnvironmentReader({"A": None}).get("A") == ""


class TestOsEnvironmentReader:
    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("PLATFORMSH_CONFIG_TEST_VALUE", "x")

        assert OsEnvironmentReader().get("PLATFORMSH_CONFIG_TEST_VALUE") == "x"

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("PLATFORMSH_CONFIG_TEST_VALUE", raising=False)

        assert OsEnvironmentReader().get("PLATFORMSH_CONFIG_TEST_VALUE") == ""

    def test_default_binding(self):
        assert isinstance(get_platform_service(EnvironmentReader), OsEnvironmentReader)


class TestAsReader:
    def test_mapping(self):
        assert as_reader({"A": "1"})("A") == "1"
        assert as_reader({})("A") == ""

    def test_callable_returning_none(self):
        assert as_reader(os.environ.get)("PLATFORMSH_CONFIG_DEFINITELY_UNSET") == ""

    def test_reader_instance(self):
        reader = MappingEnvironmentReader({"A": "1"})

        assert as_reader(reader)("A") == "1"
