"""Tests for walking configuration models into config blocks."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest
from pydantic import BaseModel, Field

from flagdoc import (
    ConfigStructureError,
    EntryKind,
    FieldCategory,
    FlagSet,
    RootBlock,
    UnresolvedFlagError,
    parse_config,
    parse_flags,
)
from sample_config import Config, RingConfig


class Node(BaseModel):
    name: str = ""
    child: Node | None = None


class Untyped(BaseModel):
    payload: Any = None


class Limits(BaseModel):
    max_streams: int = 5000
    max_line_size: int = 0


class TLSConfig(BaseModel):
    cert_path: str = ""
    insecure_skip_verify: bool = False


class ClientTLS(BaseModel):
    cert_path: str
    ca_path: str = ""


class Client(BaseModel):
    address: str = "localhost:9095"
    tls: ClientTLS | None = None


class Endpoint(BaseModel):
    url: str = ""


class Holder(BaseModel):
    endpoint: Endpoint
    retries: int = 3


class OptionalHolder(BaseModel):
    holder: Holder | None = None


class Outer(BaseModel):
    enabled: bool = True
    limits: Limits = Field(default_factory=Limits, json_schema_extra={"inline": True})
    tls: TLSConfig | None = None
    ring: RingConfig = Field(default_factory=RingConfig, description="The ring used by the outer component.")
    hidden: str = Field(default="", json_schema_extra={"doc": "hidden"})

    def register_flags(self, flags: FlagSet) -> None:
        flags.bind(self, "enabled", "outer.enabled", "Enable the outer component.")
        flags.bind(self.limits, "max_streams", "outer.max-streams", "Maximum number of streams.")
        self.ring.register_flags(flags, "outer.")


def _walk(cfg: BaseModel, root_blocks=(), **kwargs):
    return parse_config(cfg, parse_flags(cfg), root_blocks, **kwargs)


def _entry(block, name):
    return next(entry for entry in block.entries if entry.name == name)


class TestSampleConfig:
    """Walking the sample configuration without deduplication."""

    def test_blocks_are_top_level_then_root_blocks(self, config, root_blocks) -> None:
        blocks = _walk(config, root_blocks)

        assert [block.name for block in blocks] == [
            "",
            "server",
            "distributor",
            "ring",
            "ingester",
            "ring",
            "grpc_client",
            "query_scheduler",
            "grpc_client",
        ]
        assert not blocks[0].root
        assert all(block.root for block in blocks[1:])

    def test_entries_follow_declaration_order(self, config, root_blocks) -> None:
        top = _walk(config, root_blocks)[0]

        assert [entry.name for entry in top.entries] == [
            "target",
            "auth_enabled",
            "path_prefix",
            "server",
            "distributor",
            "ingester",
            "ingester_client",
            "query_scheduler",
        ]

    def test_walk_is_stable(self, root_blocks) -> None:
        first = [block.model_dump() for block in _walk(Config(), root_blocks)]
        second = [block.model_dump() for block in _walk(Config(), root_blocks)]
        assert first == second

    def test_fields_resolve_their_flags(self, config, root_blocks) -> None:
        server = _walk(config, root_blocks)[1]

        port = _entry(server, "http_listen_port")
        assert port.kind is EntryKind.FIELD
        assert port.field_flag == "server.http-listen-port"
        assert port.field_type == "int"
        assert port.field_default == "3100"
        assert port.field_description == "HTTP server listen port."

        log_level = _entry(server, "log_level")
        assert log_level.field_flag == "log.level"
        assert log_level.field_type == "string"
        assert log_level.field_default == "info"

        assert _entry(server, "graceful_shutdown_timeout").field_default == "30s"

    def test_same_model_resolves_per_instance(self, config, root_blocks) -> None:
        blocks = _walk(config, root_blocks)
        distributor_ring, ingester_ring = blocks[3], blocks[5]

        assert _entry(distributor_ring, "heartbeat_period").field_flag == "distributor.ring.heartbeat-period"
        assert _entry(ingester_ring, "heartbeat_period").field_flag == "ingester.ring.heartbeat-period"

    def test_yaml_only_field_is_documented(self, config, root_blocks) -> None:
        top = _walk(config, root_blocks)[0]

        path_prefix = _entry(top, "path_prefix")
        assert path_prefix.field_flag == ""
        assert path_prefix.field_type == "string"
        assert path_prefix.field_default == ""

    def test_description_prefers_field_description(self, config, root_blocks) -> None:
        top = _walk(config, root_blocks)[0]

        assert _entry(top, "auth_enabled").field_description == (
            "Enables authentication through the X-Scope-OrgID header."
        )
        assert _entry(top, "target").field_description == "A comma-separated list of components to run."
        assert _entry(top, "target").field_type == "list of strings"
        assert _entry(top, "target").field_default == "[all]"

    def test_excluded_field_is_skipped(self, config, root_blocks) -> None:
        top = _walk(config, root_blocks)[0]
        assert "internal_state" not in [entry.name for entry in top.entries]

    def test_field_category(self, config, root_blocks) -> None:
        ring = _walk(config, root_blocks)[3]

        assert _entry(ring, "heartbeat_timeout").field_category is FieldCategory.ADVANCED
        assert _entry(ring, "heartbeat_period").field_category is FieldCategory.BASIC

    def test_root_entry_shares_the_listed_block(self, config, root_blocks) -> None:
        blocks = _walk(config, root_blocks)

        ring_entry = _entry(blocks[2], "ring")
        assert ring_entry.kind is EntryKind.BLOCK
        assert ring_entry.root
        assert ring_entry.block is blocks[3]
        assert ring_entry.block_description == "Configures a hash ring."

    def test_non_root_nested_block(self, config, root_blocks) -> None:
        blocks = _walk(config, root_blocks)

        kvstore = _entry(blocks[3], "kvstore")
        assert not kvstore.root
        assert kvstore.block.name == "kvstore"
        assert [entry.field_flag for entry in kvstore.block.entries] == [
            "distributor.ring.store",
            "distributor.ring.prefix",
        ]

        lifecycler = _entry(blocks[4], "lifecycler").block
        assert _entry(lifecycler, "ring").block is blocks[5]
        assert _entry(lifecycler, "join_after").field_default == "0s"

    def test_without_root_blocks_everything_is_nested(self, config) -> None:
        blocks = _walk(config)

        assert len(blocks) == 1
        server = _entry(blocks[0], "server")
        assert not server.root
        assert server.block.name == "server"


class TestModelFeatures:
    """Inline, optional and described sub-models."""

    def test_inline_block_merges_entries(self) -> None:
        top = _walk(Outer())[0]

        assert [entry.name for entry in top.entries] == [
            "enabled",
            "max_streams",
            "max_line_size",
            "tls",
            "ring",
        ]
        assert _entry(top, "max_streams").field_flag == "outer.max-streams"
        assert _entry(top, "max_line_size").field_flag == ""

    def test_unset_optional_block_is_documented(self) -> None:
        tls = _entry(_walk(Outer())[0], "tls")

        assert tls.kind is EntryKind.BLOCK
        assert [entry.name for entry in tls.block.entries] == ["cert_path", "insecure_skip_verify"]
        assert tls.block.entries[1].field_type == "boolean"
        assert tls.block.entries[1].field_default == "false"

    def test_unset_section_with_required_field(self) -> None:
        tls = _entry(parse_config(Client(), FlagSet().registry())[0], "tls").block

        cert_path = _entry(tls, "cert_path")
        assert cert_path.required
        assert cert_path.field_type == "string"
        assert cert_path.field_default == ""
        assert _entry(tls, "ca_path").field_default == ""

    def test_required_section_under_unset_section(self) -> None:
        holder = _entry(parse_config(OptionalHolder(), FlagSet().registry())[0], "holder").block

        endpoint = _entry(holder, "endpoint")
        assert endpoint.kind is EntryKind.BLOCK
        assert endpoint.required
        assert [entry.name for entry in endpoint.block.entries] == ["url"]
        assert _entry(holder, "retries").field_default == "3"

    def test_field_description_overrides_root_description(self) -> None:
        roots = [RootBlock("ring", RingConfig, "Configures a hash ring.")]
        blocks = _walk(Outer(), roots)

        assert blocks[1].name == "ring"
        assert blocks[1].description == "The ring used by the outer component."

    def test_required_field(self) -> None:
        class Required(BaseModel):
            address: str
            timeout: timedelta = timedelta(seconds=1)

        instance = Required(address="localhost")
        top = parse_config(instance, FlagSet().registry())[0]

        assert top.entries[0].required
        assert not top.entries[1].required
        assert top.entries[0].field_default == "localhost"


class TestStructuralErrors:
    """Configurations that cannot be documented."""

    def test_cycle_is_rejected(self) -> None:
        with pytest.raises(ConfigStructureError, match="cyclic configuration type: Node -> Node"):
            parse_config(Node(), FlagSet().registry())

    def test_unsupported_type(self) -> None:
        with pytest.raises(ConfigStructureError, match="payload: unsupported data type"):
            parse_config(Untyped(), FlagSet().registry())

    def test_too_deep(self, config, root_blocks) -> None:
        with pytest.raises(ConfigStructureError, match="deeper than 2 levels"):
            _walk(config, root_blocks, max_depth=2)

    def test_required_flags(self, config, root_blocks) -> None:
        with pytest.raises(UnresolvedFlagError, match="path_prefix"):
            _walk(config, root_blocks, require_flags=True)

    def test_unknown_category(self) -> None:
        class Categorized(BaseModel):
            level: str = Field(default="", json_schema_extra={"category": "secret"})

        with pytest.raises(ConfigStructureError, match="unknown field category"):
            parse_config(Categorized(), FlagSet().registry())
