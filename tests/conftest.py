"""Shared schema fixtures."""

from __future__ import annotations

import copy

import pytest


SDK_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "AllOf Fix Test",
    "type": "object",
    "properties": {
        "sdk": {
            "title": "SDK Configuration",
            "$ref": "#/definitions/sdkConfig",
            "description": "Configure the default SDK.",
        },
    },
    "definitions": {
        "sdkConfig": {
            "type": "object",
            "description": "SDK configuration.",
            "allOf": [
                {"$ref": "#/definitions/targetSdkConfig"},
                {
                    "type": "object",
                    "patternProperties": {
                        "^[a-zA-Z0-9_-]+$": {"$ref": "#/definitions/targetSdkConfig"},
                    },
                },
            ],
        },
        "targetSdkConfig": {
            "type": "object",
            "properties": {
                "image": {"type": "string", "description": "Docker image"},
                "version": {"type": "string", "description": "SDK version"},
            },
        },
    },
}

RECURSIVE_SCHEMA = {
    "properties": {
        "root": {"$ref": "#/definitions/node"},
    },
    "definitions": {
        "node": {
            "type": "object",
            "description": "A tree node",
            "properties": {
                "name": {"type": "string"},
                "child": {"$ref": "#/definitions/node"},
            },
        },
    },
}

ONE_OF_SCHEMA = {
    "properties": {
        "dependencies": {
            "description": "Package dependencies",
            "oneOf": [
                {"$ref": "#/definitions/gitSource"},
                {
                    "title": "Path source",
                    "type": "object",
                    "description": "A dependency on a local path",
                    "properties": {"path": {"type": "string"}},
                },
            ],
        },
    },
    "definitions": {
        "gitSource": {
            "type": "object",
            "description": "A dependency fetched from git",
            "properties": {
                "url": {"type": "string", "format": "uri"},
                "rev": {"type": "string"},
            },
            "required": ["url"],
        },
    },
}


@pytest.fixture
def sdk_schema():
    return copy.deepcopy(SDK_SCHEMA)


@pytest.fixture
def recursive_schema():
    return copy.deepcopy(RECURSIVE_SCHEMA)


@pytest.fixture
def one_of_schema():
    return copy.deepcopy(ONE_OF_SCHEMA)
