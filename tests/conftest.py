"""Shared test fixtures and configuration."""

import os

import pytest


SAMPLE_URL = "http://www.codingrobots.com/memoires/"

SAMPLE_HTML = """<!doctype html>
<html>
<script>alert(1)</script>
<head>
  <title>Hello world</title>
  <meta name="description" content="offspring">
  <meta name="keywords" content="green day, yoohie">
  <meta itemprop="datePublished" content="2023-07-20T21:40:41+10:00" />
</head>
<body>
 <div>
   <img src="/some/image.png" alt="masterpiece">
   <a href="naive">link</a>
   <p>This is a test.</p>
   <noscript>
     <a href="rock">roll</a>
   </noscript>
 </div>
</body>
</html>"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def sample_url() -> str:
    return SAMPLE_URL


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch, tmp_path):
    """Keep STATIC_SEARCH_* variables and stray .env files out of tests."""

    for key in list(os.environ):
        if key.upper().startswith("STATIC_SEARCH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
