from zendocs.markdown import CodeLine, Heading, ListItem, Paragraph, parse, plain_text


def test_heading_then_paragraph() -> None:
    blocks = parse("# Title\n\nSome text.\nMore text.\n")
    assert blocks == [Heading(1, "Title"), Paragraph("Some text. More text.")]


def test_list_items() -> None:
    assert parse("- a\n- b\n") == [ListItem("a"), ListItem("b")]


def test_star_list_items_and_heading_levels() -> None:
    blocks = parse("## Usage\n* one\n### Details\n#NoSpace")
    assert blocks == [
        Heading(2, "Usage"),
        ListItem("one"),
        Heading(3, "Details"),
        Paragraph("#NoSpace"),
    ]


def test_empty_and_blank_input_yield_nothing() -> None:
    assert parse("") == []
    assert parse("\n\n   \n\t\n") == []


def test_fence_lines_are_emitted_individually() -> None:
    text = "Intro\n```js\nconst a = 1;\n- not code\n```\nOutro"
    assert parse(text) == [
        Paragraph("Intro"),
        CodeLine("```js"),
        Paragraph("const a = 1;"),
        ListItem("not code"),
        CodeLine("```"),
        Paragraph("Outro"),
    ]


def test_paragraph_flushed_before_heading_without_blank_line() -> None:
    blocks = parse("first\nsecond\n# Next")
    assert blocks == [Paragraph("first second"), Heading(1, "Next")]


def test_text_passes_through_verbatim() -> None:
    blocks = parse("  **bold** and [link](x)  \n-dash")
    assert blocks == [Paragraph("  **bold** and [link](x)   -dash")]


def test_prefix_detection_is_case_and_position_sensitive() -> None:
    blocks = parse(" # indented\n-item\n+ plus")
    assert all(isinstance(block, Paragraph) for block in blocks)


def test_parse_is_deterministic_and_fresh() -> None:
    text = "# A\n- b\ntext"
    first = parse(text)
    second = parse(text)
    assert first == second
    assert first is not second


def test_plain_text_reproduces_non_blank_lines() -> None:
    samples = [
        "# Title\n\nSome text.\nMore text.\n",
        "- a\n\n* b\n```\ncode\n```\n### end",
        "one\n\ntwo\n\n\nthree",
    ]
    for text in samples:
        lines = [line for line in text.split("\n") if line.strip()]
        rendered = " ".join(plain_text(parse(text)))
        expected_words = []
        for line in lines:
            for prefix in ("### ", "## ", "# ", "- ", "* "):
                if line.startswith(prefix):
                    line = line[len(prefix):]
                    break
            expected_words.append(line)
        assert rendered == " ".join(expected_words)


def test_parse_never_raises_on_odd_input() -> None:
    for text in ["#", "# ", "```", "\r\n\r\n", "- ", "\x00\n﻿# x"]:
        parse(text)


def test_heading_with_empty_text() -> None:
    assert parse("# ") == [Heading(1, "")]
