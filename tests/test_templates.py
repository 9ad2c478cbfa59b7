import pytest
from markupsafe import Markup

from feedblog.partials import footer_menu, generate_meta, mobile_menu
from feedblog.templates import DEFAULT_TEMPLATES_DIR, TemplateNotFound, TemplateStore


def test_store_reads_packaged_defaults():
    store = TemplateStore()
    assert store.search_dirs == [DEFAULT_TEMPLATES_DIR]
    assert "{{PAGE_CONTENT}}" in store.get("layout.html")
    assert "{{POST_LIST}}" in store.get("posts.html")
    assert "{{RELATED_POSTS}}" in store.get("single.html")


def test_store_prefers_project_directory(tmp_path):
    (tmp_path / "posts.html").write_text("custom {{POST_LIST}}", encoding="utf-8")
    store = TemplateStore(tmp_path)
    assert store.get("posts.html") == "custom {{POST_LIST}}"
    assert "{{PAGE_CONTENT}}" in store.get("layout.html")


def test_store_ignores_missing_project_directory(tmp_path):
    store = TemplateStore(tmp_path / "nope")
    assert store.search_dirs == [DEFAULT_TEMPLATES_DIR]


def test_store_caches_sources(tmp_path):
    path = tmp_path / "posts.html"
    path.write_text("v1 {{POST_LIST}}", encoding="utf-8")
    store = TemplateStore(tmp_path)
    assert store.get("posts.html").startswith("v1")
    path.write_text("v2 {{POST_LIST}}", encoding="utf-8")
    assert store.get("posts.html").startswith("v1")


def test_store_missing_template():
    with pytest.raises(TemplateNotFound):
        TemplateStore().get("nope.html")


def test_store_warns_on_missing_required_placeholder(tmp_path, caplog):
    (tmp_path / "layout.html").write_text("<p>no content slot</p>", encoding="utf-8")
    with caplog.at_level("WARNING", logger="feedblog.templates"):
        TemplateStore(tmp_path).get("layout.html")
    assert "PAGE_CONTENT" in caplog.text


def test_partial_override(tmp_path):
    partials = tmp_path / "_partials"
    partials.mkdir()
    (partials / "footer_menu.html").write_text(
        "{% for item in menu %}[{{ item.label }}]{% endfor %}", encoding="utf-8"
    )
    store = TemplateStore(tmp_path)
    out = footer_menu(store, [{"label": "A", "url": "/a"}])
    assert out == "[A]"
    assert isinstance(out, Markup)


def test_menus_escape_and_skip_invalid_entries():
    store = TemplateStore()
    menu = [
        {"label": "Q&A", "url": "/qa"},
        {"label": "no url"},
        "junk",
        {"label": "Home", "url": "/"},
    ]
    assert mobile_menu(store, menu) == '<a href="/qa">Q&amp;A</a><a href="/">Home</a>'
    assert footer_menu(store, None) == ""


def test_generate_meta():
    meta = generate_meta("Post", "Desc <b>", "Site")
    assert meta.title == "Post | Site"
    assert meta.description == "Desc &lt;b&gt;"
    assert generate_meta("Site", "", "Site").title == "Site"
    assert generate_meta("", "", "Site").title == "Site"
    assert generate_meta("Tom & Jerry").title == "Tom & Jerry"


def test_generate_meta_escapes_only_configured_site_title():
    meta = generate_meta("Jerry&#8217;s", "", "Cats & Mice")
    assert meta.title == "Jerry&#8217;s | Cats &amp; Mice"
    assert generate_meta("", "", "Cats & Mice").title == "Cats &amp; Mice"
