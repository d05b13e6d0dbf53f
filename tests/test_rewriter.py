"""End-to-end tests for component rewriting."""

from __future__ import annotations

from jsxtv import TransformConfig, generate, transform_source
from jsxtv.exceptions import ErrorCode

from .helpers import (
    assert_contains,
    assert_not_contains,
    find_nodes,
    flatten_concatenation,
    marker_args,
)

CARD = """
const Card = ({ title, visible, tags }) => {
  return (
    <div className="card">
      <h1>{title}</h1>
      {visible && <span>{title}</span>}
      <ul>{tags.map((t) => <li>{t}</li>)}</ul>
      <footer>{tags}</footer>
    </div>
  );
};
Card.templateVars = [['title'], ['visible', { type: 'control' }], ['tags', { type: 'list' }]];
"""

VISIBLE = "[{ type: 'identifier', value: 'visible' }]"


def control_calls(tree: dict) -> list[list[object]]:
    return [
        marker_args(call)
        for call in find_nodes(tree, "CallExpression")
        if call["callee"].get("name") == "getLanguageControl"
    ]


class TestCard:
    def test_descriptor_is_removed(self, rewrite) -> None:
        assert_not_contains(rewrite(CARD), "templateVars")

    def test_context_prop_is_added_to_parameters(self, rewrite) -> None:
        assert_contains(rewrite(CARD), "({ title, visible, tags, __context__ }) =>")

    def test_prelude_order(self, rewrite_tree) -> None:
        tree = rewrite_tree(CARD)
        body = tree["body"][0]["declarations"][0]["init"]["body"]["body"]
        assert [generate(statement) for statement in body[:3]] == [
            "let _uid4 = typeof __context__ === 'number' ? __context__ : 0;",
            "let _uid3 = [getLanguageList('primitive', null, _uid4)];",
            "let _uid = getLanguageReplace('format', 'title', _uid4);",
        ]
        assert body[3]["type"] == "ReturnStatement"

    def test_replace_variable_is_renamed(self, rewrite) -> None:
        code = rewrite(CARD)
        assert_contains(code, "<h1>{_uid}</h1>", "<span>{_uid}</span>")

    def test_logical_slot_always_renders(self, rewrite) -> None:
        assert_contains(
            rewrite(CARD),
            f"{{getLanguageControl(['ifTruthy', 'open'], {VISIBLE}, _uid4)}}"
            "<span>{_uid}</span>"
            f"{{getLanguageControl(['ifTruthy', 'close'], {VISIBLE}, _uid4)}}",
        )
        assert_not_contains(rewrite(CARD), "visible &&")

    def test_list_slots_are_bracketed(self, rewrite) -> None:
        code = rewrite(CARD)
        assert_contains(
            code,
            "<ul>{getLanguageList('open', 'tags', _uid4)}"
            "{_uid3.map((t) => <li>{t}</li>)}"
            "{getLanguageList('close', 'tags', _uid4)}</ul>",
            "<footer>{getLanguageList('open', 'tags', _uid4)}{_uid3}"
            "{getLanguageList('close', 'tags', _uid4)}</footer>",
        )

    def test_report(self, diagnostics) -> None:
        result = transform_source(CARD, diagnostics=diagnostics)
        report = result.component("Card")
        assert report is not None
        assert report.rewritten
        assert report.replace == {"title": "_uid"}
        assert report.control == {"visible": "_uid2"}
        assert report.list == {"tags": "_uid3"}
        assert report.context == "_uid4"
        assert report.aliases == {"tags": "tags"}
        assert result.code == generate(result.tree)


class TestListAliases:
    SOURCE = """
function List({ items }) {
  const early = <p>{rows}</p>;
  const rows = items.map((item) => <li>{item}</li>);
  return <div>{rows}{rows.map((row) => row)}</div>;
}
List.templateVars = [['items', { type: 'list' }]];
"""

    def test_alias_declaration_reads_the_stand_in(self, rewrite) -> None:
        code = rewrite(self.SOURCE)
        assert_contains(
            code,
            "function List({ items, __context__ }) {",
            "const rows = _uid.map((item) => <li>{item}</li>);",
        )

    def test_slot_before_alias_is_untagged(self, rewrite) -> None:
        assert_contains(rewrite(self.SOURCE), "const early = <p>{rows}</p>;")

    def test_slots_after_alias_are_tagged_with_the_original_name(self, rewrite) -> None:
        opening = "{getLanguageList('open', 'items', _uid2)}"
        closing = "{getLanguageList('close', 'items', _uid2)}"
        assert_contains(
            rewrite(self.SOURCE),
            f"<div>{opening}{{rows}}{closing}{opening}{{rows.map((row) => row)}}{closing}</div>",
        )

    def test_configured_aliases(self, rewrite) -> None:
        source = (
            "const Tags = ({ tags, labels }) => <div>{labels}</div>;\n"
            "Tags.templateVars = [['tags', { type: 'list', aliases: ['labels'] }]];\n"
        )
        assert_contains(
            rewrite(source),
            "<div>{getLanguageList('open', 'tags', _uid2)}{labels}"
            "{getLanguageList('close', 'tags', _uid2)}</div>",
        )

    def test_object_child_stand_in(self, rewrite) -> None:
        source = (
            "const People = ({ people }) => <ul>{people.map((p) => <li>{p.name}</li>)}</ul>;\n"
            "People.templateVars = [['people', { type: 'list', child: { type: 'object', props: ['name'] } }]];\n"
        )
        assert_contains(
            rewrite(source),
            "let _uid = [{ name: getLanguageList('objectProperty', 'name', _uid2) }];",
        )

    def test_unknown_child_gets_no_stand_in(self, rewrite, diagnostics) -> None:
        source = (
            "const Grid = ({ cells }) => <table>{cells}</table>;\n"
            "Grid.templateVars = [['cells', { type: 'list', child: { type: 'table' } }]];\n"
        )
        code = rewrite(source)
        assert_not_contains(code, "let _uid =")
        assert_contains(code, "{getLanguageList('open', 'cells', _uid2)}{_uid}")
        assert diagnostics.codes() == [ErrorCode.UNKNOWN_LIST_CHILD]

    def test_expression_body_becomes_a_block(self, rewrite) -> None:
        source = "const Tags = ({ tags }) => <i>{tags}</i>;\nTags.templateVars = [['tags', { type: 'list' }]];\n"
        assert_contains(
            rewrite(source),
            "const Tags = ({ tags, __context__ }) => { let _uid2 =",
            "return <i>{getLanguageList('open', 'tags', _uid2)}{_uid}",
        )


class TestTernaries:
    def test_both_branches_are_kept_between_markers(self, rewrite_tree) -> None:
        tree = rewrite_tree(
            "const Toggle = ({ isOpen }) => <div>{isOpen ? <Open /> : <Closed />}</div>;\n"
            "Toggle.templateVars = [['isOpen', { type: 'control' }]];\n"
        )
        (container,) = [
            node
            for node in find_nodes(tree, "JSXExpressionContainer")
            if node["expression"]["type"] == "BinaryExpression"
        ]
        parts = flatten_concatenation(container["expression"])
        args = [{"type": "identifier", "value": "isOpen"}]
        assert len(parts) == 6
        assert marker_args(parts[0]) == [["ifTruthy", "open"], args]
        assert parts[1]["openingElement"]["name"]["name"] == "Open"
        assert marker_args(parts[2]) == [["ifTruthy", "close"], args]
        assert marker_args(parts[3]) == [["else", "open"], args]
        assert parts[4]["openingElement"]["name"]["name"] == "Closed"
        assert marker_args(parts[5]) == [["else", "close"], args]
        # only the context declaration keeps a conditional
        conditionals = find_nodes(tree, "ConditionalExpression")
        assert [generate(node["test"]) for node in conditionals] == ["typeof __context__ === 'number'"]

    def test_branch_components_receive_context(self, rewrite) -> None:
        code = rewrite(
            "const Toggle = ({ isOpen }) => <div>{isOpen ? <Open /> : <Closed />}</div>;\n"
            "Toggle.templateVars = [['isOpen', { type: 'control' }]];\n"
        )
        assert_contains(code, "<Open __context__={_uid2} />", "<Closed __context__={_uid2} />")
        assert_not_contains(code, "isOpen ?")

    def test_negated_test(self, rewrite_tree) -> None:
        tree = rewrite_tree(
            "const Toggle = ({ isOpen }) => <div>{!isOpen ? 'closed' : 'open'}</div>;\n"
            "Toggle.templateVars = [['isOpen', { type: 'control' }]];\n"
        )
        assert [call[0] for call in control_calls(tree)] == [
            ["ifFalsy", "open"],
            ["ifFalsy", "close"],
            ["else", "open"],
            ["else", "close"],
        ]

    def test_unrecognised_test_is_left_alone(self, rewrite, diagnostics) -> None:
        code = rewrite(
            "const Toggle = ({ isOpen, ready }) => <div>{isOpen && ready ? 'a' : 'b'}</div>;\n"
            "Toggle.templateVars = [['isOpen', { type: 'control' }]];\n"
        )
        assert_contains(code, "{isOpen && ready ? 'a' : 'b'}")
        assert ErrorCode.UNRECOGNIZED_CONTROL in diagnostics.codes()

    def test_ternary_without_control_variable_is_untouched(self, rewrite) -> None:
        code = rewrite(
            "const Toggle = ({ isOpen, other }) => <div>{other ? 'a' : 'b'}</div>;\n"
            "Toggle.templateVars = [['isOpen', { type: 'control' }]];\n"
        )
        assert_contains(code, "{other ? 'a' : 'b'}")


class TestLogicalSlots:
    SOURCE = """
const Status = ({ status }) => (
  <div>
    {status === 'active' && <b>on</b>}
    {status !== 'active' && <i>off</i>}
    {!status && <u>none</u>}
  </div>
);
Status.templateVars = [['status', { type: 'control' }]];
"""

    def test_statement_types(self, rewrite_tree) -> None:
        tree = rewrite_tree(self.SOURCE)
        assert [call[0] for call in control_calls(tree)] == [
            ["ifEqual", "open"],
            ["ifEqual", "close"],
            ["ifNotEqual", "open"],
            ["ifNotEqual", "close"],
            ["ifFalsy", "open"],
            ["ifFalsy", "close"],
        ]

    def test_comparison_arguments(self, rewrite_tree) -> None:
        tree = rewrite_tree(self.SOURCE)
        assert control_calls(tree)[0][1] == [
            {"type": "identifier", "value": "status"},
            {"type": "literal", "value": "active"},
        ]

    def test_markup_is_unconditional(self, rewrite) -> None:
        code = rewrite(self.SOURCE)
        assert_not_contains(code, "&&")
        assert_contains(code, "<b>on</b>", "<i>off</i>", "<u>none</u>")

    def test_or_is_not_a_control_slot(self, rewrite) -> None:
        code = rewrite(
            "const S = ({ status }) => <p>{status || 'none'}</p>;\n"
            "S.templateVars = [['status', { type: 'control' }]];\n"
        )
        assert_contains(code, "{status || 'none'}")
        assert_not_contains(code, "getLanguageControl(")

    def test_list_inside_control_slot(self, rewrite) -> None:
        code = rewrite(
            "const S = ({ visible, tags }) => <p>{visible && tags}</p>;\n"
            "S.templateVars = [['visible', { type: 'control' }], ['tags', { type: 'list' }]];\n"
        )
        truthy = "[{ type: 'identifier', value: 'visible' }]"
        assert_contains(
            code,
            f"<p>{{getLanguageControl(['ifTruthy', 'open'], {truthy}, _uid3)}}"
            "{getLanguageList('open', 'tags', _uid3)}{_uid2}"
            "{getLanguageList('close', 'tags', _uid3)}"
            f"{{getLanguageControl(['ifTruthy', 'close'], {truthy}, _uid3)}}</p>",
        )

    def test_attribute_slot_becomes_concatenation(self, rewrite) -> None:
        code = rewrite(
            "const Panel = ({ visible }) => <div className={visible && 'shown'} />;\n"
            "Panel.templateVars = [['visible', { type: 'control' }]];\n"
        )
        assert_contains(
            code,
            f"className={{getLanguageControl(['ifTruthy', 'open'], {VISIBLE}, _uid2) + 'shown' + "
            f"getLanguageControl(['ifTruthy', 'close'], {VISIBLE}, _uid2)}}",
        )


class TestElements:
    def test_nested_components_receive_context(self, rewrite) -> None:
        code = rewrite(
            """
const Shelf = ({ books }) => (
  <section>
    <Header />
    {books.map((book) => <Book key={book} />)}
  </section>
);
Shelf.templateVars = [['books', { type: 'list' }]];
"""
        )
        assert_contains(
            code,
            "<Header __context__={_uid2} />",
            "<Book key={book} __context__={_uid2 + 1} />",
        )
        assert_not_contains(code, "<section __context__")

    def test_text_inputs_keep_a_copy_of_value(self, rewrite) -> None:
        code = rewrite(
            """
const Form = ({ name }) => (
  <form>
    <input value={name} />
    <input type="email" value={name} />
    <input type="checkbox" value={name} />
  </form>
);
Form.templateVars = ['name'];
"""
        )
        assert_contains(
            code,
            "<input value={_uid} jsxtv_value={_uid} />",
            '<input type="email" value={_uid} jsxtv_value={_uid} />',
            '<input type="checkbox" value={_uid} />',
        )

    def test_text_input_type_in_expression_container(self, rewrite) -> None:
        code = rewrite(
            "const F = ({ name }) => <form><input type={'text'} value={name} />"
            "<input type={'radio'} value={name} /></form>;\n"
            "F.templateVars = ['name'];\n"
        )
        assert_contains(
            code,
            "<input type={'text'} value={_uid} jsxtv_value={_uid} />",
            "<input type={'radio'} value={_uid} />",
        )

    def test_custom_context_prop(self, rewrite) -> None:
        code = rewrite(
            "const A = ({ x }) => <B />;\nA.templateVars = ['x'];\n",
            TransformConfig(context_prop="ctx"),
        )
        assert_contains(code, "({ x, ctx }) =>", "typeof ctx === 'number'", "<B ctx={_uid2} />")


class TestParameters:
    def test_props_identifier(self, rewrite) -> None:
        code = rewrite(
            """
function Profile(props) {
  const { title } = props;
  const data = { title, label: title, other: props.title };
  return <h2 title={title}>{title.toUpperCase()} {title}</h2>;
}
Profile.templateVars = ['title'];
"""
        )
        assert_contains(
            code,
            "function Profile(props) {",
            "let _uid2 = typeof props.__context__ === 'number' ? props.__context__ : 0;",
            "const { title } = props;",
            "const data = { title: _uid, label: _uid, other: props.title };",
            "<h2 title={_uid}>{title.toUpperCase()} {_uid}</h2>",
        )

    def test_no_parameters(self, rewrite) -> None:
        code = rewrite("function Empty() { return <p />; }\nEmpty.templateVars = [];\n")
        assert_contains(code, "function Empty({ __context__ }) {", "let _uid = typeof __context__")

    def test_existing_context_prop_is_reused(self, rewrite) -> None:
        code = rewrite(
            "function R({ a, __context__ }) { return <p>{a}</p>; }\nR.templateVars = ['a'];\n"
        )
        assert_contains(code, "function R({ a, __context__ }) {")

    def test_defaulted_pattern(self, rewrite) -> None:
        code = rewrite(
            "function R({ a } = {}) { return <p>{a}</p>; }\nR.templateVars = ['a'];\n"
        )
        assert_contains(code, "function R({ a, __context__ } = {}) {")

    def test_array_pattern_is_reported(self, rewrite, diagnostics) -> None:
        code = rewrite("function R([a]) { return <p>{a}</p>; }\nR.templateVars = ['a'];\n")
        assert_contains(code, "function R([a]) {", "typeof __context__ === 'number'")
        assert diagnostics.codes() == [ErrorCode.UNSUPPORTED_PARAMETER]


class TestNaming:
    def test_generated_names_avoid_existing_ones(self, rewrite) -> None:
        code = rewrite(
            "const _uid = 1;\nconst A = ({ x }) => <p>{x}{_uid}</p>;\nA.templateVars = ['x'];\n"
        )
        assert_contains(code, "let _uid2 = getLanguageReplace('format', 'x', _uid3);", "<p>{_uid2}{_uid}</p>")

    def test_names_are_unique_across_components(self, diagnostics) -> None:
        result = transform_source(
            "const A = ({ x }) => <p>{x}</p>;\nA.templateVars = ['x'];\n"
            "const B = ({ y }) => <p>{y}</p>;\nB.templateVars = ['y'];\n",
            diagnostics=diagnostics,
        )
        a, b = result.components
        names = [a.replace["x"], a.context, b.replace["y"], b.context]
        assert len(set(names)) == 4

    def test_locals_and_keys_are_not_renamed(self, rewrite) -> None:
        code = rewrite(
            """
function A({ title }) {
  const f = (title) => title;
  const o = { title: 1 };
  return <p>{o.title}{f(title)}</p>;
}
A.templateVars = ['title'];
"""
        )
        assert_contains(code, "const o = { title: 1 };", "<p>{o.title}{f(_uid)}</p>")
