from feedblog.renderer import placeholders, render_template


def test_render_substitutes_placeholder():
    assert render_template("Hello {{NAME}}", {"NAME": "World"}) == "Hello World"


def test_render_replaces_every_occurrence():
    out = render_template("{{A}}-{{A}}-{{B}}", {"A": "x", "B": "y"})
    assert out == "x-x-y"


def test_unmatched_placeholders_pass_through():
    assert render_template("Hi {{NAME}} {{OTHER}}", {"NAME": "Bo"}) == "Hi Bo {{OTHER}}"


def test_unused_context_keys_are_ignored():
    assert render_template("static", {"NAME": "x"}) == "static"


def test_keys_are_case_sensitive():
    assert render_template("{{name}}", {"NAME": "x"}) == "{{name}}"


def test_substituted_values_are_not_rescanned():
    out = render_template("{{A}} {{B}}", {"A": "{{B}}", "B": "b"})
    assert out == "{{B}} b"
    out = render_template("{{A}}", {"A": "{{A}}"})
    assert out == "{{A}}"


def test_render_empty_template_and_none_values():
    assert render_template("", {"A": "x"}) == ""
    assert render_template("[{{A}}]", {"A": None}) == "[]"
    assert render_template("[{{N}}]", {"N": 3}) == "[3]"


def test_placeholders_lists_unique_keys_in_order():
    assert placeholders("{{B}} {{A}} {{B}} {{ spaced }}") == ["B", "A"]
    assert placeholders("") == []


def test_keys_with_punctuation_and_non_ascii_names():
    assert render_template("Hi {{SEO-TITLE}}", {"SEO-TITLE": "x"}) == "Hi x"
    assert render_template("Hi {{post.title}}", {"post.title": "x"}) == "Hi x"
    assert render_template("{{título}}!", {"título": "ok"}) == "ok!"
    assert render_template("{{a+b}} {{(c)}}", {"a+b": "1", "(c)": "2"}) == "1 2"


def test_key_containing_another_token_is_matched_whole():
    context = {"A": "short", "{{A}}": "long"}
    assert render_template("{{{{A}}}} {{A}}", context) == "long short"
