from __future__ import annotations

from interaction_gateway.constants import ApplicationCommandOptionType as OptionType
from interaction_gateway.options import (
    CommandInteractionOptionResolver,
    resolve_command_options,
    resolve_context_menu_options,
    transform_option,
    transform_resolved,
)

RESOLVED = {
    "users": {
        "42": {"id": "42", "username": "bob", "discriminator": "0042"},
        "7": {"id": "7", "username": "carol", "discriminator": "0007"},
    },
    "members": {
        "42": {"nick": "Bobby", "roles": ["r1"], "joined_at": "2023-05-01T12:00:00+00:00"},
    },
}


def test_flat_integer_option() -> None:
    resolver = resolve_command_options({"options": [{"name": "n", "type": 4, "value": 7}]})

    assert resolver.is_sub_command is False
    assert resolver.is_sub_command_group is False
    assert resolver.get("n").value == 7
    assert resolver.get_integer("n") == 7
    assert resolver.get("n").options is None
    assert resolver.resolved.members is None
    assert resolver.resolved.users is None


def test_missing_options_and_resolved_are_empty() -> None:
    resolver = resolve_command_options({"name": "ping"})

    assert len(resolver) == 0
    assert resolver.get("anything") is None
    assert resolver.get_sub_command() is None


def test_sub_command_is_flattened() -> None:
    resolver = resolve_command_options(
        {
            "options": [
                {
                    "name": "in",
                    "type": 1,
                    "options": [{"name": "subject", "type": 3, "value": "maths"}],
                }
            ]
        }
    )

    assert resolver.is_sub_command is True
    assert resolver.sub_command_name == "in"
    assert resolver.sub_command_group_name is None
    assert resolver.get_string("subject") == "maths"


def test_sub_command_group_flattens_down_to_leaves() -> None:
    resolver = resolve_command_options(
        {
            "options": [
                {
                    "name": "grp",
                    "type": 2,
                    "options": [
                        {
                            "name": "sub",
                            "type": 1,
                            "options": [{"name": "x", "type": 3, "value": "hi"}],
                        }
                    ],
                }
            ]
        }
    )

    assert resolver.is_sub_command_group is True
    assert resolver.is_sub_command is False
    assert resolver.sub_command_group_name == "grp"
    assert resolver.get_sub_command_group() == "grp"
    assert resolver.sub_command_name == "sub"
    option = resolver.get("x")
    assert option.name == "x"
    assert option.value == "hi"
    assert option.options is None


def test_sub_command_without_options() -> None:
    resolver = resolve_command_options({"options": [{"name": "status", "type": 1}]})

    assert resolver.is_sub_command is True
    assert resolver.sub_command_name == "status"
    assert resolver.options == ()


def test_user_option_gets_member_and_user() -> None:
    option = transform_option({"name": "who", "type": 6, "value": "42"}, RESOLVED, "guild-1")

    assert option.type is OptionType.USER
    assert option.user.id == "42"
    assert option.user.username == "bob"
    assert option.member.nickname == "Bobby"
    assert option.member.user.username == "bob"
    assert option.member.id == "42"
    assert option.member.guild_id == "guild-1"
    assert option.member.display_name == "Bobby"


def test_user_option_without_member_entry() -> None:
    option = transform_option({"name": "who", "type": 6, "value": "7"}, RESOLVED)

    assert option.member is None
    assert option.user.username == "carol"


def test_non_user_option_ignores_resolved_table() -> None:
    option = transform_option({"name": "text", "type": 3, "value": "42"}, RESOLVED)

    assert option.value == "42"
    assert option.member is None
    assert option.user is None


def test_resolved_table_reaches_nested_options() -> None:
    resolver = resolve_command_options(
        {
            "options": [
                {
                    "name": "kick",
                    "type": 1,
                    "options": [{"name": "target", "type": 6, "value": "42"}],
                }
            ],
            "resolved": RESOLVED,
        }
    )

    assert resolver.get_member("target").nickname == "Bobby"
    assert resolver.get_user("target").id == "42"


def test_unknown_option_type_yields_none() -> None:
    resolver = resolve_command_options({"options": [{"name": "odd", "type": 99, "value": 1}]})

    option = resolver.get("odd")
    assert option.type is None
    assert option.value == 1
    assert resolver.get_integer("odd") is None
    assert resolver.get_string("odd") is None


def test_typed_getters_check_type() -> None:
    resolver = resolve_command_options(
        {
            "options": [
                {"name": "flag", "type": 5, "value": False},
                {"name": "ratio", "type": 10, "value": 0.5},
            ]
        }
    )

    assert resolver.get_boolean("flag") is False
    assert resolver.get_number("ratio") == 0.5
    assert resolver.get_integer("ratio") is None
    assert resolver.get_user("flag") is None
    assert resolver.get_member("flag") is None


def test_transform_resolved_keeps_source_order_and_merges_users() -> None:
    resolved = {
        "users": {"b": {"id": "b", "username": "B"}, "a": {"id": "a", "username": "A"}},
        "members": {"b": {"nick": "bee"}, "a": {}},
    }

    entities = transform_resolved(resolved)

    assert list(entities.users) == ["b", "a"]
    assert list(entities.members) == ["b", "a"]
    assert entities.members["a"].user.username == "A"
    assert entities.members["b"].display_name == "bee"


def test_transform_resolved_omits_absent_tables() -> None:
    entities = transform_resolved({"users": {"a": {"id": "a"}}})

    assert entities.members is None
    assert entities.users["a"].id == "a"


def test_context_menu_user_target_becomes_option() -> None:
    resolver = resolve_context_menu_options(
        {"type": 2, "target_id": "42", "resolved": RESOLVED}, "guild-1"
    )

    option = resolver.get("user")
    assert option.type is OptionType.USER
    assert option.value == "42"
    assert resolver.get_user("user").username == "bob"
    assert resolver.get_member("user").nickname == "Bobby"


def test_context_menu_message_target_has_no_option() -> None:
    resolver = resolve_context_menu_options(
        {"type": 3, "target_id": "m1", "resolved": {"messages": {"m1": {"id": "m1"}}}}
    )

    assert len(resolver) == 0
    assert resolver.resolved.users is None


def test_resolver_accepts_prebuilt_options() -> None:
    options = [transform_option({"name": "n", "type": 4, "value": 1})]
    resolver = CommandInteractionOptionResolver(options)

    assert [option.name for option in resolver] == ["n"]
    assert resolver.resolved.users is None
