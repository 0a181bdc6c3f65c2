"""Tests for volume and snapshot types."""

from datetime import datetime, timezone

import pytest

from hyper_types.codec import ZERO_TIME, DecodingError, decode, encode
from hyper_types.volumes import (Snapshot, SnapshotCreateRequest,
                                 SnapshotsListResponse, Volume,
                                 VolumeCreateRequest, VolumesInitializeRequest,
                                 VolumesInitializeResponse,
                                 VolumesListResponse)

VOLUME = {
    "Name": "tardis",
    "Driver": "custom",
    "Mountpoint": "/var/lib/docker/volumes/tardis",
    "Status": {"hello": "world", "replicas": 3},
    "Labels": {"com.example.some-label": "some-value"},
    "Scope": "local",
    "CreatedAt": "2016-06-07T20:31:11.853781Z",
}


class TestVolume:
    """Test volume payloads."""

    def test_zero_value_omits_status(self):
        value = Volume(
            name="tardis",
            driver="local",
            mountpoint="/var/lib/docker/volumes/tardis",
            scope="local",
        )
        assert value.created_at == ZERO_TIME

        data = encode(value)
        assert "Status" not in data
        for key in ("Name", "Driver", "Mountpoint", "Scope"):
            assert key in data
        assert data["CreatedAt"] == "0001-01-01T00:00:00Z"

    def test_round_trip(self):
        value = decode(Volume, VOLUME)
        assert value.status["replicas"] == 3
        assert value.created_at == datetime(2016, 6, 7, 20, 31, 11, 853781, tzinfo=timezone.utc)
        assert encode(value) == VOLUME

    def test_nanosecond_created_at_round_trip(self):
        payload = dict(VOLUME, CreatedAt="2016-06-07T20:31:11.853781916Z")
        value = decode(Volume, payload)
        assert value.created_at.nanosecond == 916
        assert encode(value) == payload

    def test_null_labels_round_trip(self):
        payload = dict(VOLUME, Labels=None)
        assert encode(decode(Volume, payload)) == payload

    def test_status_is_optional_on_decode(self):
        payload = dict(VOLUME)
        del payload["Status"]
        assert decode(Volume, payload).status == {}

    def test_scope_is_required(self):
        payload = dict(VOLUME)
        del payload["Scope"]
        with pytest.raises(DecodingError) as exc:
            decode(Volume, payload)
        assert exc.value.path == "Scope"

    def test_bad_created_at(self):
        payload = dict(VOLUME, CreatedAt=1465331471)
        with pytest.raises(DecodingError) as exc:
            decode(Volume, payload)
        assert exc.value.path == "CreatedAt"


class TestVolumeLists:
    """Test list and create payloads."""

    def test_list_with_null_entry(self):
        value = decode(VolumesListResponse, {"Volumes": [VOLUME, None], "Warnings": []})
        assert value.volumes[0].name == "tardis"
        assert value.volumes[1] is None

    def test_list_path_in_error(self):
        bad = dict(VOLUME, Driver=7)
        with pytest.raises(DecodingError) as exc:
            decode(VolumesListResponse, {"Volumes": [bad], "Warnings": []})
        assert exc.value.path == "Volumes[0].Driver"

    def test_create_request(self):
        request = VolumeCreateRequest(name="tardis", driver="local", driver_opts={"size": "10G"})
        assert encode(request) == {
            "Name": "tardis",
            "Driver": "local",
            "DriverOpts": {"size": "10G"},
            "Labels": {},
        }


class TestVolumeInitialize:
    """Test volume initialization payloads."""

    def test_request(self):
        value = decode(
            VolumesInitializeRequest,
            {
                "Reload": False,
                "Volume": [{"Name": "data", "Source": "https://example.com/data.tar"}],
            },
        )
        assert value.volume[0].source == "https://example.com/data.tar"

    def test_response(self):
        value = decode(
            VolumesInitializeResponse,
            {"Session": "s1", "Cookie": "c1", "Uploaders": {"data": "u1"}},
        )
        assert value.uploaders == {"data": "u1"}


class TestSnapshots:
    """Test snapshot payloads."""

    def test_snapshot_round_trip(self):
        payload = {"ID": "snap1", "Name": "nightly", "Volume": "tardis", "Size": 10}
        assert encode(decode(Snapshot, payload)) == payload

    def test_list(self):
        value = decode(
            SnapshotsListResponse,
            {
                "Snapshots": [{"ID": "snap1", "Name": "nightly", "Volume": "tardis", "Size": 10}],
                "Warnings": ["driver slow"],
            },
        )
        assert value.snapshots[0].volume == "tardis"
        assert value.warnings == ["driver slow"]

    def test_create_request(self):
        request = SnapshotCreateRequest(name="nightly", volume="tardis")
        assert encode(request) == {"Name": "nightly", "Volume": "tardis", "Force": False}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
