"""Shared fixtures for the citation machine tests."""

import pytest

from app import create_app
from config import AppConfig


ARTICLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Fallback Title | Example News</title>
  <meta property="og:title" content="Scientists Find Water &amp; Ice on Mars">
  <meta content="Example News" property="og:site_name">
  <meta name="author" content='Jane Q. Doe'>
  <meta property="article:published_time" content="2021-03-05T10:15:00Z">
  <script type="application/ld+json">
    {"@type": "NewsArticle", "headline": "Ignored headline",
     "author": {"@type": "Person", "name": "Someone Else"},
     "datePublished": "1999-01-01"}
  </script>
</head>
<body><p>By Another Person</p></body>
</html>
"""


@pytest.fixture
def article_html():
    return ARTICLE_HTML


@pytest.fixture
def config():
    return AppConfig(cors_origin="https://cite.example")


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
