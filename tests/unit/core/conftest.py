"""Shared fixtures for core unit tests"""

from pathlib import Path

import pytest


EXAMPLE_POST = """\
---
title: "Example"
date: 2018-10-12T11:39:17+05:30
tags: ["clojure"]
draft: true
---
Body text here.
"""

SAMPLE_POST = """\
---
title: Pattern Matching in F#
date: 2018-03-01T09:00:00-05:00
tags:
  - fsharp
  - pattern-matching
  - fsharp
categories: [fsharp]
slug: fsharp-pattern-matching
---

Pattern matching lets you **destructure** values in a single expression.

<!--more-->

## Active patterns

```fsharp
let (|Even|Odd|) n = if n % 2 = 0 then Even else Odd
```
"""


def write_post(root: Path, rel: str, title: str, date: str, extra: str = "", body: str = "Body.\n") -> Path:
    """Write a minimal valid post under root and return its path."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\ntitle: {title}\ndate: {date}\n{extra}---\n{body}", encoding="utf-8")
    return path


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """A small content tree: two posts, one draft, one broken file."""
    root = tmp_path / "content"
    write_post(root, "posts/first.md", "First", "2018-01-01T10:00:00+00:00", "tags: [clojure]\n")
    write_post(root, "posts/second.md", "Second", "2018-02-01T10:00:00+00:00", "tags: [clojure, fsharp]\n")
    write_post(root, "posts/wip.md", "Work in progress", "2018-03-01T10:00:00+00:00", "draft: true\n")
    (root / "posts" / "broken.md").write_text("---\ntitle: Broken\n", encoding="utf-8")
    (root / "notes.txt").write_text("not markdown", encoding="utf-8")
    return root


@pytest.fixture(name="example_post")
def example_post_fixture():
    return EXAMPLE_POST


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST


@pytest.fixture(name="write_post")
def write_post_fixture():
    return write_post
