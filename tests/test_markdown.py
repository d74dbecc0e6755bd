# =============================================================================
# tests/test_markdown.py - Markdown Renderer Tests
# =============================================================================
# Tests for the tokenizer, the block/inline parser, heading anchors and the
# HTML renderer (including escaping of untrusted text and URLs).
#
# Run with: pytest tests/test_markdown.py -v
# =============================================================================

from lib.markdown import (
    CodeBlock,
    Emphasis,
    Figure,
    Heading,
    Link,
    ListBlock,
    Paragraph,
    Quote,
    Rule,
    Strong,
    Text,
    parse,
    parse_inline,
    table_of_contents,
    to_html,
    tokenize,
)


class TestTokenize:
    """Line classification."""

    def test_kinds(self):
        source = "# Title\n\ntext\n- item\n1. first\n> quoted\n---\n```py\n![alt](/a.png)"

        kinds = [token.kind for token in tokenize(source)]

        assert kinds == ["heading", "blank", "text", "ulist", "olist", "quote", "rule", "fence", "image"]

    def test_heading_level(self):
        token = tokenize("### Third")[0]

        assert (token.kind, token.level, token.content) == ("heading", 3, "Third")

    def test_hash_without_space_is_text(self):
        assert tokenize("#hashtag")[0].kind == "text"

    def test_heading_keeps_trailing_hash_in_word(self):
        assert tokenize("## About C#")[0].content == "About C#"


class TestParseInline:

    def test_strong_and_emphasis(self):
        nodes = parse_inline("a **b** and *c*")

        assert nodes[0] == Text("a ")
        assert isinstance(nodes[1], Strong)
        assert isinstance(nodes[3], Emphasis)

    def test_link(self):
        (link,) = parse_inline("[docs](https://example.com)")

        assert isinstance(link, Link)
        assert link.href == "https://example.com"

    def test_code_is_literal(self):
        nodes = parse_inline("`**not bold**`")

        assert nodes[0].value == "**not bold**"


class TestParse:
    """Block structure."""

    def test_blocks(self):
        source = "\n".join([
            "## Heading",
            "",
            "Paragraph line one",
            "line two",
            "",
            "- a",
            "- b",
            "",
            "> quote",
            "",
            "```python",
            "# not a heading",
            "```",
            "",
            "![Diagram](/img/d.png)",
            "",
            "***",
        ])

        blocks = parse(source).children

        assert [type(block) for block in blocks] == [
            Heading, Paragraph, ListBlock, Quote, CodeBlock, Figure, Rule,
        ]
        assert blocks[4].code == "# not a heading"
        assert blocks[4].language == "python"
        assert len(blocks[2].items) == 2

    def test_unclosed_fence_runs_to_end(self):
        (block,) = parse("```\ncode\nmore").children

        assert block.code == "code\nmore"

    def test_duplicate_heading_anchors_are_unique(self):
        document = parse("## Setup\n\n## Setup\n\n## Setup")

        anchors = [block.anchor for block in document.children]

        assert anchors == ["setup", "setup-1", "setup-2"]

    def test_heading_without_slug_text(self):
        (heading,) = parse("## !!!").children

        assert heading.anchor == "section"


class TestTableOfContents:

    def test_levels_two_and_three(self):
        document = parse("# Title\n\n## Intro\n\n### Detail\n\n#### Deep")

        toc = table_of_contents(document)

        assert [(entry.id, entry.text, entry.level) for entry in toc] == [
            ("intro", "Intro", 2),
            ("detail", "Detail", 3),
        ]


class TestRender:
    """HTML output."""

    def test_heading_has_anchor(self):
        assert to_html("## Getting Started") == '<h2 id="getting-started">Getting Started</h2>'

    def test_escapes_html(self):
        html = to_html("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_javascript_links_neutralized(self):
        html = to_html("[click](javascript:alert(1))")

        assert 'href="#"' in html

    def test_external_links_open_in_new_tab(self):
        html = to_html("[site](https://example.com)")

        assert 'target="_blank"' in html
        assert 'rel="noopener noreferrer"' in html

    def test_internal_links_stay_in_tab(self):
        assert "target" not in to_html("[blog](/blog)")

    def test_code_block_language_class(self):
        html = to_html("```js\nlet a = 1 < 2;\n```")

        assert html == '<pre><code class="language-js">let a = 1 &lt; 2;</code></pre>'

    def test_figure_caption(self):
        html = to_html("![A chart](/chart.png)")

        assert "<figcaption>A chart</figcaption>" in html

    def test_ordered_list(self):
        assert to_html("1. one\n2. two") == "<ol><li>one</li><li>two</li></ol>"

    def test_empty_source(self):
        assert to_html("") == ""
