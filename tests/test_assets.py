import logging

import pytest
from pydantic import ValidationError

from pagekit.assets import (
    InlineScript,
    InlineStylesheet,
    ScriptFlags,
    ScriptUrl,
    StylesheetUrl,
    emit_scripts,
    emit_stylesheets,
)


def test_stylesheets_keep_first_url_and_all_inline_css(caplog):
    sheets = [
        StylesheetUrl(url="css/base.css"),
        InlineStylesheet(css="body { margin: 0; }"),
        StylesheetUrl(url="css/base.css", mimetype="text/other"),
        InlineStylesheet(css="body { margin: 0; }"),
    ]

    with caplog.at_level(logging.WARNING):
        markup = emit_stylesheets(sheets)

    assert markup == (
        '<link rel="stylesheet" type="text/css" href="css/base.css" />\n'
        '<style type="text/css">\nbody { margin: 0; }\n</style>\n'
        '<style type="text/css">\nbody { margin: 0; }\n</style>\n'
    )
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "css/base.css" in warnings[0].getMessage()


def test_url_dedup_is_exact_match_only():
    markup = emit_stylesheets(
        [StylesheetUrl(url="css/a.css"), StylesheetUrl(url="./css/a.css")]
    )

    assert markup.count("<link") == 2


def test_scripts_emit_flags_and_dedup(caplog):
    scripts = [
        ScriptUrl(url="js/app.js", flags=ScriptFlags.DEFER),
        InlineScript(source="init();", flags=ScriptFlags.DEFER | ScriptFlags.ASYNC),
        ScriptUrl(url="js/app.js"),
    ]

    with caplog.at_level(logging.WARNING):
        markup = emit_scripts(scripts)

    assert markup == (
        '<script type="text/javascript" src="js/app.js" defer="defer"></script>\n'
        '<script type="text/javascript" defer="defer" async="async">\ninit();\n</script>\n'
    )
    assert any("js/app.js" in r.getMessage() for r in caplog.records)


def test_seen_urls_are_per_call():
    scripts = [ScriptUrl(url="js/app.js")]

    assert emit_scripts(scripts) == emit_scripts(scripts)


def test_url_values_are_escaped():
    markup = emit_stylesheets([StylesheetUrl(url='css/a.css?x="1"&y=2')])

    assert 'href="css/a.css?x=&quot;1&quot;&amp;y=2"' in markup


def test_non_integer_flags_fall_back_to_default():
    assert ScriptUrl(url="a.js", flags="defer").flags == ScriptFlags.NONE
    assert InlineScript(source="x", flags=3).flags == ScriptFlags.DEFER | ScriptFlags.ASYNC


def test_descriptors_reject_missing_source():
    with pytest.raises(ValidationError):
        StylesheetUrl(url=None)
    with pytest.raises(ValidationError):
        InlineScript(source=42)
