"""Tests for container lifecycle types."""

import base64
import copy
from datetime import datetime, timezone

import pytest

from hyper_types.codec import DecodingError, decode, encode, from_json, to_json
from hyper_types.containers import (CHANGE_ADD, CHANGE_DELETE, MODE_DIR,
                                    Container, ContainerChange,
                                    ContainerCreateResponse, ContainerJSON,
                                    ContainerNode, ContainerPathStat,
                                    ContainerProcessList, MountPoint, Port)

ENDPOINT = {
    "IPAMConfig": None,
    "Links": [],
    "Aliases": [],
    "NetworkID": "7ea29fc1412292a2d7bba362f9253545fecdfa8ce9a6e37dd10ba8bee7129812",
    "EndpointID": "7587b82f0dada3656fda26588aee72630c6fab1536d36e394b2bfbcf898c971d",
    "Gateway": "172.17.0.1",
    "IPAddress": "172.17.0.2",
    "IPPrefixLen": 16,
    "IPv6Gateway": "",
    "GlobalIPv6Address": "",
    "GlobalIPv6PrefixLen": 0,
    "MacAddress": "02:42:ac:12:00:02",
}

INSPECT = {
    "Id": "ba033ac4401106a3b513bc9d639eee123ad78ca3616b921167cd74b20e25ed39",
    "Created": "2016-06-07T20:31:11.853781916Z",
    "Path": "/bin/sh",
    "Args": ["-c", "exit 9"],
    "State": {
        "Status": "exited",
        "Running": False,
        "Paused": False,
        "Restarting": False,
        "OOMKilled": False,
        "Dead": False,
        "Pid": 0,
        "ExitCode": 9,
        "Error": "",
        "StartedAt": "2016-06-07T20:31:12.106Z",
        "FinishedAt": "2016-06-07T20:31:12.162Z",
    },
    "Image": "sha256:e4a5c5c83bdb",
    "ResolvConfPath": "/var/lib/docker/containers/ba03/resolv.conf",
    "HostnamePath": "/var/lib/docker/containers/ba03/hostname",
    "HostsPath": "/var/lib/docker/containers/ba03/hosts",
    "LogPath": "/var/lib/docker/containers/ba03/ba03-json.log",
    "Name": "/boring_euclid",
    "RestartCount": 0,
    "Driver": "overlay2",
    "MountLabel": "",
    "ProcessLabel": "",
    "AppArmorProfile": "",
    "ExecIDs": [],
    "HostConfig": None,
    "GraphDriver": {"Name": "overlay2", "Data": {"MergedDir": "/merged"}},
    "SizeRw": 0,
    "Mounts": [
        {
            "Name": "data",
            "Source": "/var/lib/docker/volumes/data/_data",
            "Destination": "/data",
            "Driver": "local",
            "Mode": "z",
            "RW": True,
            "Propagation": "",
        }
    ],
    "Config": {
        "Hostname": "ba033ac44011",
        "Domainname": "",
        "User": "",
        "AttachStdin": False,
        "AttachStdout": True,
        "AttachStderr": True,
        "ExposedPorts": {"80/tcp": {}},
        "Tty": False,
        "OpenStdin": False,
        "StdinOnce": False,
        "Env": ["PATH=/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"],
        "Cmd": ["/bin/sh", "-c", "exit 9"],
        "Image": "ubuntu",
        "Volumes": {"/data": {}},
        "WorkingDir": "",
        "Entrypoint": [],
        "OnBuild": [],
        "Labels": {"com.example.vendor": "Acme"},
        "StopSignal": "SIGTERM",
    },
    "NetworkSettings": {
        "Bridge": "",
        "SandboxID": "",
        "HairpinMode": False,
        "LinkLocalIPv6Address": "",
        "LinkLocalIPv6PrefixLen": 0,
        "Ports": {"80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "8080"}]},
        "SandboxKey": "",
        "SecondaryIPAddresses": [],
        "SecondaryIPv6Addresses": [],
        "EndpointID": ENDPOINT["EndpointID"],
        "Gateway": "172.17.0.1",
        "GlobalIPv6Address": "",
        "GlobalIPv6PrefixLen": 0,
        "IPAddress": "172.17.0.2",
        "IPPrefixLen": 16,
        "IPv6Gateway": "",
        "MacAddress": "02:42:ac:12:00:02",
        "Networks": {"bridge": ENDPOINT},
    },
}

LIST_ENTRY = {
    "Id": "8dfafdbc3a40",
    "Names": ["/boring_feynman"],
    "Image": "ubuntu:latest",
    "ImageID": "d74508fb6632491cea586a1fd7d748dfc5274cd6fdfedee309ecdcbc2bf5cb82",
    "Command": "echo 1",
    "Created": 1367854155,
    "Ports": [{"PrivatePort": 2222, "PublicPort": 3333, "Type": "tcp"}],
    "Labels": {},
    "State": "exited",
    "Status": "Exit 0",
    "HostConfig": {"NetworkMode": "default"},
    "NetworkSettings": {"Networks": {"bridge": ENDPOINT}},
    "Mounts": [],
}


class TestContainerCreateResponse:
    """Test the create response."""

    def test_encode_keeps_empty_warnings(self):
        value = ContainerCreateResponse(id="abc123", warnings=[])
        assert to_json(value) == '{"Id":"abc123","Warnings":[]}'

    def test_decode_renamed_id(self):
        value = decode(ContainerCreateResponse, {"Id": "abc123", "Warnings": ["low memory"]})
        assert value.id == "abc123"
        assert value.warnings == ["low memory"]

    def test_null_warnings_round_trip(self):
        text = '{"Id":"abc","Warnings":null}'
        value = from_json(ContainerCreateResponse, text)
        assert value.warnings is None
        assert to_json(value) == text

    def test_missing_warnings(self):
        with pytest.raises(DecodingError) as exc:
            decode(ContainerCreateResponse, {"Id": "abc123"})
        assert exc.value.path == "Warnings"


class TestContainerJSON:
    """Test the inspect payload."""

    def test_round_trip(self):
        value = decode(ContainerJSON, INSPECT)
        assert encode(value) == INSPECT

    def test_base_fields_flattened(self):
        value = decode(ContainerJSON, INSPECT)
        assert value.id.startswith("ba033ac4")
        assert value.state.exit_code == 9
        assert value.config.exposed_ports == {"80/tcp": {}}
        assert value.mounts[0].rw is True
        assert value.host_config is None

    def test_size_pointer_semantics(self):
        value = decode(ContainerJSON, INSPECT)
        assert value.size_rw == 0
        assert value.size_root_fs is None

        data = encode(value)
        assert data["SizeRw"] == 0
        assert "SizeRootFs" not in data

    def test_node_omitted_when_unset(self):
        assert "Node" not in encode(ContainerJSON())

    def test_port_bindings(self):
        value = decode(ContainerJSON, INSPECT)
        binding = value.network_settings.ports["80/tcp"][0]
        assert binding.host_ip == "0.0.0.0"
        assert binding.host_port == "8080"

    def test_missing_nested_field_reports_path(self):
        payload = copy.deepcopy(INSPECT)
        del payload["State"]["Pid"]
        with pytest.raises(DecodingError) as exc:
            decode(ContainerJSON, payload)
        assert exc.value.path == "State.Pid"

    def test_nested_type_mismatch(self):
        payload = copy.deepcopy(INSPECT)
        payload["NetworkSettings"]["Networks"]["bridge"]["IPPrefixLen"] = "16"
        with pytest.raises(DecodingError) as exc:
            decode(ContainerJSON, payload)
        assert exc.value.path == "NetworkSettings.Networks.bridge.IPPrefixLen"


class TestContainer:
    """Test list entries."""

    def test_round_trip(self):
        assert encode(decode(Container, LIST_ENTRY)) == LIST_ENTRY

    def test_summary_host_config(self):
        value = decode(Container, LIST_ENTRY)
        assert value.host_config.network_mode == "default"
        assert value.network_settings.networks["bridge"].ip_address == "172.17.0.2"

    def test_sizes_omitted_when_zero(self):
        data = encode(Container(id="abc"))
        assert "SizeRw" not in data
        assert "SizeRootFs" not in data
        assert data["HostConfig"] == {}
        assert data["NetworkSettings"] is None


class TestPort:
    """Test port entries."""

    def test_optional_fields_omitted(self):
        assert encode(Port(private_port=8080, type="tcp")) == {
            "PrivatePort": 8080,
            "Type": "tcp",
        }

    def test_optional_fields_present(self):
        data = encode(Port(ip="0.0.0.0", private_port=8080, public_port=80, type="tcp"))
        assert data == {"IP": "0.0.0.0", "PrivatePort": 8080, "PublicPort": 80, "Type": "tcp"}


class TestMountPoint:
    """Test mount points."""

    def test_bind_mount_omits_name_and_driver(self):
        data = encode(MountPoint(source="/src", destination="/dst", mode="ro"))
        assert "Name" not in data
        assert "Driver" not in data
        assert data["RW"] is False


class TestContainerNode:
    """Test cluster node info."""

    def test_ip_rename(self):
        value = decode(
            ContainerNode,
            {
                "ID": "node1",
                "IP": "10.0.0.5",
                "Addr": "10.0.0.5:2375",
                "Name": "worker",
                "Cpus": 4,
                "Memory": 8192,
                "Labels": {},
            },
        )
        assert value.ip_address == "10.0.0.5"
        assert encode(value)["IP"] == "10.0.0.5"


class TestContainerChange:
    """Test filesystem changes."""

    def test_kind_names(self):
        assert ContainerChange(kind=CHANGE_ADD, path="/tmp").kind_name == "A"
        assert ContainerChange(kind=CHANGE_DELETE, path="/tmp").kind_name == "D"
        assert ContainerChange(path="/etc").kind_name == "C"
        assert ContainerChange(kind=9).kind_name == "?"

    def test_decode(self):
        value = decode(ContainerChange, {"Kind": 1, "Path": "/dev"})
        assert value == ContainerChange(kind=CHANGE_ADD, path="/dev")


class TestContainerProcessList:
    """Test top output."""

    def test_rows_with_null_processes(self):
        value = decode(ContainerProcessList, {"Titles": ["PID"], "Processes": None})
        assert value.rows() == []

    def test_rows(self):
        value = decode(
            ContainerProcessList,
            {
                "Titles": ["UID", "PID", "CMD"],
                "Processes": [["root", "13642", "sleep 10"]],
            },
        )
        assert value.rows() == [{"UID": "root", "PID": "13642", "CMD": "sleep 10"}]


class TestContainerPathStat:
    """Test archive path stat."""

    STAT = {
        "name": "etc",
        "size": 4096,
        "mode": MODE_DIR | 0o755,
        "mtime": "2016-06-07T20:31:11.5Z",
        "linkTarget": "",
    }

    def test_lowercase_wire_names(self):
        value = decode(ContainerPathStat, self.STAT)
        assert value.is_dir
        assert not value.is_symlink
        assert value.mtime == datetime(2016, 6, 7, 20, 31, 11, 500000, tzinfo=timezone.utc)
        assert encode(value) == self.STAT

    def test_header(self):
        value = decode(ContainerPathStat, self.STAT)
        header = value.to_header()
        base64.b64decode(header, validate=True)
        assert ContainerPathStat.from_header(header) == value

    def test_bad_header(self):
        with pytest.raises(DecodingError):
            ContainerPathStat.from_header("not base64!!")

    def test_header_not_json(self):
        header = base64.b64encode(b"plain text").decode("ascii")
        with pytest.raises(DecodingError):
            ContainerPathStat.from_header(header)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
