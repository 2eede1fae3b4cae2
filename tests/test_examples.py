#!/usr/bin/env python3
"""
Test the bundled examples run end to end.
"""

import main


def test_examples_render(capsys):
    assert main.main() == 0
    out = capsys.readouterr().out
    assert "Rendered 5 functions" in out
    assert "returns() implies (param1 != null && (param3 != null) || (param2 != null))" in out
