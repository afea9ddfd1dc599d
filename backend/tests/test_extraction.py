"""Tests for codecontext.core.extraction"""

from codecontext.core import extract_dependencies, extract_exports


def test_typescript_imports_and_requires_are_deduplicated():
    content = "\n".join([
        "import React from 'react';",
        'import { render } from "./render";',
        "const fs = require('fs');",
        "import Other from 'react';",
        "  import Lazy from 'lazy-lib';",
    ])
    assert extract_dependencies(content, "typescript") == ["react", "./render", "fs", "lazy-lib"]


def test_python_imports():
    content = "import os\nfrom typing import List\nimport os\n\nx = 1"
    assert extract_dependencies(content, "python") == ["os", "typing"]


def test_java_imports():
    content = "package a;\nimport java.util.List;\nimport static org.junit.Assert.assertEquals;\n"
    assert extract_dependencies(content, "java") == [
        "java.util.List",
        "static org.junit.Assert.assertEquals",
    ]


def test_exports_for_scripts():
    content = "\n".join([
        "export function foo() {}",
        "export class Bar {}",
        "export const baz = 1;",
        "export interface Props<T> {}",
        "export default App;",
        "export function foo() {}",
    ])
    assert extract_exports(content, "javascript") == ["foo", "Bar", "baz", "Props", "App"]


def test_default_function_export_uses_function_name():
    assert extract_exports("export default function Page() {}", "typescript") == ["Page"]


def test_unsupported_languages_yield_nothing():
    assert extract_dependencies("#include <stdio.h>", "c") == []
    assert extract_exports("def foo(): pass", "python") == []
    assert extract_dependencies("import x", "haskell") == []


def test_garbage_input_never_raises():
    junk = "\x00\x01 import from '' require( export default\n\n\t}"
    assert isinstance(extract_dependencies(junk, "typescript"), list)
    assert isinstance(extract_exports(junk, "typescript"), list)
