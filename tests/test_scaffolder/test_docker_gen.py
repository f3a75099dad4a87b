"""Tests for Docker file generation."""

from __future__ import annotations

import pytest
import yaml

from rest_generate.scaffolder.docker_gen import DockerGenerator
from rest_generate.scaffolder.synthesizer import build_context


pytestmark = pytest.mark.unit


class TestDockerGenerator:
    def test_renders_three_files(self, renderer, make_options):
        files = DockerGenerator(renderer).render_all(
            build_context(make_options(features=["docker"]))
        )
        assert list(files) == ["Dockerfile", ".dockerignore", "docker-compose.yml"]

    def test_typescript_dockerfile_builds(self, renderer, make_options):
        files = DockerGenerator(renderer).render_all(
            build_context(make_options(features=["docker"]))
        )
        dockerfile = files["Dockerfile"]
        assert dockerfile.startswith("FROM node:20-alpine\n")
        assert "RUN npm run build" in dockerfile
        assert "EXPOSE 3000" in dockerfile

    def test_javascript_dockerfile_skips_build(self, renderer, make_options):
        opts = make_options(language="javascript", features=["docker"])
        dockerfile = DockerGenerator(renderer).render_all(build_context(opts))["Dockerfile"]
        assert "npm run build" not in dockerfile

    def test_dockerignore(self, renderer, make_options):
        files = DockerGenerator(renderer).render_all(
            build_context(make_options(features=["docker"]))
        )
        entries = files[".dockerignore"].splitlines()
        assert "node_modules" in entries
        assert ".env" in entries

    def test_compose_with_mongo(self, renderer, make_options):
        opts = make_options(name="shop", features=["docker"])
        compose = yaml.safe_load(
            DockerGenerator(renderer).render_all(build_context(opts))["docker-compose.yml"]
        )
        assert set(compose["services"]) == {"app", "mongo"}
        app = compose["services"]["app"]
        assert app["ports"] == ["3000:3000"]
        assert app["depends_on"] == ["mongo"]
        assert app["environment"]["MONGODB_URI"] == "mongodb://mongo:27017/shop"
        assert "mongo-data" in compose["volumes"]

    def test_compose_without_database(self, renderer, make_options):
        opts = make_options(database="none", orm="none", features=["docker"])
        compose = yaml.safe_load(
            DockerGenerator(renderer).render_all(build_context(opts))["docker-compose.yml"]
        )
        assert list(compose["services"]) == ["app"]
        assert "depends_on" not in compose["services"]["app"]
        assert "volumes" not in compose
