"""Shared test fixtures for resume2folio."""

import shutil
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from folio.generator_rule import TemplateStore

REPO_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"


PORTFOLIO_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Jane Doe | Portfolio</title>
  <meta name="author" content="Jane Doe">
  <link rel="stylesheet" href="/css/main.css">
  <style>body { color: red; }</style>
  <script src="/js/app.js"></script>
</head>
<body>
  <nav>
    <ul>
      <li><a href="#about">About</a></li>
      <li><a href="#experience">Experience</a></li>
      <li><a href="#projects">Projects</a></li>
    </ul>
  </nav>
  <header class="hero">
    <img src="img/avatar.png" alt="Jane Doe">
    <h1>Jane Doe</h1>
    <h2>Senior Frontend Engineer</h2>
  </header>
  <section id="about">
    <div class="inner">
      <p>I build accessible interfaces for the web and love type systems.</p>
      <p>Previously I spent six years at Initech shipping dashboards.</p>
    </div>
  </section>
  <section id="skills">
    <h2>Skills</h2>
    <ul class="skill-list">
      <li class="pill">TypeScript</li>
      <li class="pill">React</li>
    </ul>
  </section>
  <section id="projects">
    <h2>Projects</h2>
    <div class="grid">
      <article class="project">
        <img class="project-thumb" src="/img/p1.png">
        <h3>Design System</h3>
        <p>A component library used by forty product teams.</p>
        <a href="https://example.com/ds">Live</a>
      </article>
      <article class="project">
        <h3>Chart Kit</h3>
        <p>Declarative charts for React dashboards and reports.</p>
      </article>
    </div>
  </section>
  <section id="experience">
    <h2>Experience</h2>
    <p>Initech, 2018 - 2024</p>
  </section>
  <footer>
    <p>Contact: <a href="mailto:jane@doe.dev">jane@doe.dev</a></p>
    <a href="https://github.com/janedoe">GitHub</a>
    <a href="https://www.linkedin.com/in/jane-doe">LinkedIn</a>
    <a href="https://twitter.com/janedoe">Twitter</a>
    <p>Designed and built by Jane Doe</p>
  </footer>
</body>
</html>
"""


RESUME_TEXT = """Jane Alice Doe
Software Engineer
jane@example.com | +1 555-123-4567
linkedin.com/in/jane-doe | github.com/janedoe
Summary
Backend engineer who enjoys turning slow batch jobs into fast, observable services.
Skills
Python, Django, PostgreSQL, Docker
Projects
E-Commerce Platform | React, Node
Built a scalable store with 10k users. https://github.com/janedoe/shop
AI Tasks
Developed a task app.
Education
BSc Computer Science
"""


@pytest.fixture
def portfolio_html():
    """A small but realistic personal portfolio page."""
    return PORTFOLIO_HTML


@pytest.fixture
def resume_text():
    """Plain text as it comes out of a one-page résumé PDF."""
    return RESUME_TEXT


@pytest.fixture
def profile():
    """A generation payload as submitted by the form."""
    return {
        "name": "Sam Rivera",
        "role": "Data Engineer",
        "bio": "I build pipelines that people can trust.",
        "skills": "Python, Airflow, SQL",
        "email": "sam@rivera.io",
        "github": "https://github.com/samrivera",
        "linkedin": "sam-rivera",
        "projects": [
            {
                "title": "Lakehouse",
                "description": "Incremental ingestion for a 40 TB lake.",
                "link": "https://github.com/samrivera/lakehouse",
            },
        ],
    }


@pytest.fixture
def templates_dir(tmp_path):
    """A writable copy of the built-in templates."""
    target = tmp_path / "templates"
    shutil.copytree(REPO_TEMPLATES, target)
    return target


@pytest.fixture
def template_store(templates_dir):
    """A TemplateStore over the temporary template directory."""
    return TemplateStore(templates_dir)


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects."""

    def _make(text="", status_code=200):
        resp = MagicMock()
        resp.text = text
        resp.status_code = status_code
        resp.ok = status_code < 400
        resp.raise_for_status.return_value = None
        return resp

    return _make


@pytest.fixture
def mock_session():
    """A mock requests session; tests set .get side effects."""
    return MagicMock()
