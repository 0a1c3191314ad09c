"""
Error Taxonomy Unit Tests
Tests for core/schemas/errors.py
"""
import pytest
from pydantic import ValidationError

from core.schemas.errors import (
    ConfigException,
    ErrorCodes,
    IndexOutOfRange,
    MerkleError,
    MerkleException,
    UnsupportedHashAlgorithm,
)


class TestIndexOutOfRange:
    def test_carries_index_and_count(self):
        error = IndexOutOfRange(index=7, leaf_count=3)

        assert error.index == 7
        assert error.leaf_count == 3
        assert error.details == {"index": 7, "leaf_count": 3}
        assert "7" in str(error) and "3" in str(error)

    def test_is_merkle_and_index_error(self):
        error = IndexOutOfRange(index=0, leaf_count=0)

        assert isinstance(error, MerkleException)
        assert isinstance(error, IndexError)

    def test_retryable(self):
        assert IndexOutOfRange(index=1, leaf_count=1).retryable

    def test_custom_message(self):
        error = IndexOutOfRange(index=1, leaf_count=1, message="nope")

        assert error.message == "nope"


class TestErrorModelConversion:
    def test_exception_to_model(self):
        model = IndexOutOfRange(index=2, leaf_count=1).to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == ErrorCodes.INDEX_OUT_OF_RANGE
        assert model.details["index"] == 2
        assert model.retryable is True

    def test_model_to_exception(self):
        model = MerkleError(code=ErrorCodes.CONFIG_ERROR, message="bad config")

        exc = model.to_exception()

        assert isinstance(exc, MerkleException)
        assert exc.code == ErrorCodes.CONFIG_ERROR
        assert exc.message == "bad config"

    def test_model_forbids_extra_fields(self):
        with pytest.raises(ValidationError):
            MerkleError(code="X", message="m", unexpected=True)

    def test_model_dump(self):
        model = MerkleError(code="X", message="m")

        assert model.model_dump() == {
            "code": "X",
            "message": "m",
            "details": {},
            "retryable": False,
        }


class TestOtherExceptions:
    def test_unsupported_hash_details(self):
        error = UnsupportedHashAlgorithm("bad", algorithm="md4x")

        assert error.details == {"algorithm": "md4x"}
        assert isinstance(error, ValueError)

    def test_config_exception_path(self):
        error = ConfigException("broken", path="/tmp/x.yaml")

        assert error.code == ErrorCodes.CONFIG_ERROR
        assert error.details["path"] == "/tmp/x.yaml"

    def test_repr(self):
        assert repr(MerkleException("m", code="C")) == "MerkleException(code='C', message='m')"
