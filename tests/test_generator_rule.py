"""Tests for template translation, rendering and the template store."""

import pytest

from folio import generator_rule
from folio.cloner import TemplateSkeleton
from folio.exceptions import TemplateNotFoundError, TemplateRenderError
from folio.generator_rule import (
    CompiledTemplate,
    TemplateCache,
    TemplateStore,
    handlebars_to_jinja,
    is_cloned,
    render_markup,
)


class TestTranslation:
    """handlebars_to_jinja() maps the supported subset."""

    def test_variable(self):
        assert handlebars_to_jinja("<h1>{{name}}</h1>") == "<h1>{{ name }}</h1>"

    def test_dotted_path(self):
        assert handlebars_to_jinja("{{this.title}}") == '{{ this["title"] }}'

    def test_split_each(self):
        out = handlebars_to_jinja('{{#each (split skills ",")}}{{this}}{{/each}}')
        assert out == '{% for this in skills|split(",") %}{{ this }}{% endfor %}'

    def test_if_else(self):
        out = handlebars_to_jinja("{{#if email}}a{{else}}b{{/if}}")
        assert out == "{% if email %}a{% else %}b{% endif %}"

    def test_literal_braces_are_raw(self):
        out = handlebars_to_jinja("<style>a { color: red }</style>{{name}}")
        assert out == "{% raw %}<style>a { color: red }</style>{% endraw %}{{ name }}"

    def test_substring(self):
        assert handlebars_to_jinja("{{substring bio 0 160}}") == "{{ bio|substring(0, 160) }}"

    def test_endraw_is_split_out(self):
        out = handlebars_to_jinja("a{% endraw %}b")
        assert out == "{% raw %}a{% endraw %}{{ \"{%\" }}{% raw %} endraw %}b{% endraw %}"


class TestRenderMarkup:
    """render_markup() with profile-shaped data."""

    def test_each_over_split_skills(self):
        markup = '<ul>{{#each (split skills ",")}}<li>{{this}}</li>{{/each}}</ul>'
        assert render_markup(markup, {"skills": "A, B"}) == "<ul><li>A</li><li>B</li></ul>"

    def test_each_over_projects(self):
        markup = "{{#each projects}}<h3>{{this.title}}</h3>{{/each}}"
        data = {"projects": [{"title": "One"}, {"title": "Two"}]}
        assert render_markup(markup, data) == "<h3>One</h3><h3>Two</h3>"

    def test_index(self):
        markup = "{{#each projects}}{{@index}}{{/each}}"
        assert render_markup(markup, {"projects": [{}, {}]}) == "01"

    def test_values_are_escaped(self):
        assert render_markup("{{name}}", {"name": "<script>"}) == "&lt;script&gt;"

    def test_triple_stash_is_raw(self):
        assert render_markup("{{{bio}}}", {"bio": "<b>x</b>"}) == "<b>x</b>"

    def test_missing_values_are_empty(self):
        assert render_markup("[{{name}}][{{this.title}}]", {}) == "[][]"

    def test_unless(self):
        markup = "{{#unless link}}none{{/unless}}"
        assert render_markup(markup, {}) == "none"
        assert render_markup(markup, {"link": "x"}) == ""

    def test_page_text_is_never_template_code(self):
        markup = "{% for x in y %}{{name}}"
        assert render_markup(markup, {"name": "Jane"}) == "{% for x in y %}Jane"

    def test_unknown_helper_stays_literal(self):
        assert render_markup("{{> partial}}", {}) == "{{> partial}}"

    def test_block_left_open_stays_literal(self):
        assert render_markup("{{#each projects}}<p>x</p>", {}) == "{{#each projects}}<p>x</p>"

    def test_stray_closer_stays_literal(self):
        markup = "<p>Use {{/each}} to close a loop</p>"
        assert render_markup(markup, {}) == markup

    def test_mismatched_closer_stays_literal(self):
        markup = "{{#if name}}{{/each}}{{name}}{{/if}}"
        assert render_markup(markup, {"name": "Jane"}) == "{{/each}}Jane"

    def test_else_outside_a_block_stays_literal(self):
        assert render_markup("a {{else}} b", {}) == "a {{else}} b"

    def test_each_else(self):
        markup = "{{#each projects}}{{this.title}}{{else}}none{{/each}}"
        assert render_markup(markup, {"projects": []}) == "none"

    def test_endraw_in_page_text(self):
        markup = "<pre>{% endraw %} {{x</pre>{{name}}"
        assert render_markup(markup, {"name": "Jane"}) == "<pre>{% endraw %} {{x</pre>Jane"

    def test_endraw_variants_in_page_text(self):
        markup = "{%- endraw -%}{{name}}{%endraw%}"
        assert render_markup(markup, {"name": "Jane"}) == "{%- endraw -%}Jane{%endraw%}"

    def test_substring(self):
        assert render_markup("{{substring bio 0 5}}", {"bio": "Hello world"}) == "Hello"
        assert render_markup("{{substring bio 6 50}}", {"bio": "Hello world"}) == "world"
        assert render_markup("{{substring bio 0 5}}", {}) == ""

    def test_substring_is_escaped(self):
        assert render_markup("{{substring bio 0 3}}", {"bio": "<b>x"}) == "&lt;b&gt;"

    def test_jinja_keywords_stay_literal(self):
        markup = "<p>{{in}} {{not}} {{#if or}}x{{/if}}</p>"
        assert render_markup(markup, {}) == "<p>{{in}} {{not}} {{#if or}}x{{/if}}</p>"

    def test_compile_errors_are_wrapped(self, monkeypatch):
        monkeypatch.setattr(generator_rule, "handlebars_to_jinja", lambda markup: "{% if %}")
        with pytest.raises(TemplateRenderError):
            render_markup("<p>x</p>", {})


class TestTemplateCache:
    """Cloned templates are never cached."""

    def test_put_and_get(self):
        cache = TemplateCache()
        entry = CompiledTemplate(template=None, css="")
        assert cache.put("simple", entry) is True
        assert cache.get("simple") is entry
        assert "simple" in cache
        assert len(cache) == 1

    def test_cloned_is_not_stored(self):
        cache = TemplateCache()
        assert cache.put("cloned-abcd1234", CompiledTemplate(None, "")) is False
        assert cache.get("cloned-abcd1234") is None
        assert len(cache) == 0

    def test_invalidate(self):
        cache = TemplateCache()
        cache.put("a", CompiledTemplate(None, ""))
        cache.put("b", CompiledTemplate(None, ""))
        cache.invalidate("a")
        assert "a" not in cache and "b" in cache
        cache.invalidate()
        assert len(cache) == 0

    def test_is_cloned(self):
        assert is_cloned("cloned-1234abcd")
        assert not is_cloned("simple")


def _write_template(root, name, markup, css=""):
    folder = root / name
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "index.hbs").write_text(markup, encoding="utf-8")
    (folder / "style.css").write_text(css, encoding="utf-8")


class TestTemplateStore:
    """Templates on disk."""

    def test_builtin_is_cached(self, template_store):
        first = template_store.load("simple")
        assert template_store.load("simple") is first
        assert "simple" in template_store.cache
        assert "font-family" in first.css

    def test_builtin_change_needs_invalidate(self, tmp_path):
        _write_template(tmp_path, "plain", "<p>v1 {{name}}</p>")
        store = TemplateStore(tmp_path)
        assert store.render("plain", {"name": "A"})[0] == "<p>v1 A</p>"
        _write_template(tmp_path, "plain", "<p>v2 {{name}}</p>")
        assert store.render("plain", {"name": "A"})[0] == "<p>v1 A</p>"
        store.cache.invalidate("plain")
        assert store.render("plain", {"name": "A"})[0] == "<p>v2 A</p>"

    def test_cloned_is_reloaded(self, tmp_path):
        _write_template(tmp_path, "cloned-00000001", "<p>v1</p>")
        store = TemplateStore(tmp_path)
        assert store.render("cloned-00000001", {})[0] == "<p>v1</p>"
        _write_template(tmp_path, "cloned-00000001", "<p>v2</p>")
        assert store.render("cloned-00000001", {})[0] == "<p>v2</p>"
        assert len(store.cache) == 0

    def test_missing_template(self, template_store):
        assert not template_store.exists("nope")
        with pytest.raises(TemplateNotFoundError):
            template_store.load("nope")

    @pytest.mark.parametrize("name", ["../simple", ".hidden", "a/b", ""])
    def test_unsafe_names(self, template_store, name):
        assert not template_store.exists(name)
        with pytest.raises(TemplateNotFoundError):
            template_store.load(name)

    def test_save_clone(self, template_store, templates_dir):
        skeleton = TemplateSkeleton("<h1>{{name}}</h1>", {}, "h1{color:red}")
        name = template_store.save_clone(skeleton, source_url="https://jane.dev")
        assert name.startswith("cloned-")
        assert len(name) == len("cloned-") + 8
        assert (templates_dir / name / "index.hbs").read_text(encoding="utf-8") == "<h1>{{name}}</h1>"
        assert (templates_dir / name / "style.css").read_text(encoding="utf-8") == "h1{color:red}"
        assert template_store.exists(name)

    def test_render_normalises_profile(self, template_store, profile):
        html, css = template_store.render("simple", profile)
        assert "<h1>Sam Rivera</h1>" in html
        assert '<meta name="description" content="I build pipelines that people can trust.">' in html
        assert "<li>Airflow</li>" in html
        assert 'href="https://github.com/samrivera"' in html
        assert 'href="https://www.linkedin.com/in/sam-rivera"' in html
        assert "Lakehouse" in html
        assert css

    def test_render_to_dir(self, template_store, profile, tmp_path):
        index = template_store.render_to_dir("simple", profile, tmp_path / "out")
        assert index == tmp_path / "out" / "index.html"
        assert "Sam Rivera" in index.read_text(encoding="utf-8")
        assert (tmp_path / "out" / "style.css").read_text(encoding="utf-8")

    def test_preview_inlines_css(self, template_store):
        html = template_store.preview("simple")
        assert "Alex Johnson" in html
        assert "<style>" in html
        assert html.index("<style>") < html.index("</head>")
