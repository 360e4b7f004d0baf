"""
Shared OpenAPI fixtures.
"""

import pytest

from openapi_dereferencer.refs import REF_KEY


def has_refs(node) -> bool:
    if isinstance(node, dict):
        if REF_KEY in node:
            return True
        return any(has_refs(v) for v in node.values())
    if isinstance(node, list):
        return any(has_refs(v) for v in node)
    return False


def has_key(node, key) -> bool:
    if isinstance(node, dict):
        if key in node:
            return True
        return any(has_key(v, key) for v in node.values())
    if isinstance(node, list):
        return any(has_key(v, key) for v in node)
    return False


@pytest.fixture
def apps_doc():
    """A small API with refs in paths, responses and schemas."""
    return {
        "openapi": "3.0.0",
        "info": {"title": "Apps", "version": "1.0"},
        "paths": {
            "/v2/apps": {
                "get": {
                    "parameters": [{"$ref": "#/components/parameters/per_page"}],
                    "responses": {
                        "200": {"$ref": "#/components/responses/list_apps"},
                        "default": {"$ref": "#/components/responses/unexpected_error"},
                    },
                }
            }
        },
        "components": {
            "parameters": {
                "per_page": {"name": "per_page", "in": "query", "schema": {"type": "integer", "default": 20}},
            },
            "responses": {
                "list_apps": {
                    "description": "A list of apps",
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/apps_response"}}
                    },
                },
                "unexpected_error": {
                    "description": "Unexpected error",
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/error"}}},
                },
            },
            "schemas": {
                "app": {
                    "type": "object",
                    "properties": {"id": {"type": "string"}, "spec": {"$ref": "#/components/schemas/app_spec"}},
                },
                "app_spec": {"type": "object", "properties": {"name": {"type": "string"}}},
                "apps_response": {
                    "type": "object",
                    "properties": {"apps": {"type": "array", "items": {"$ref": "#/components/schemas/app"}}},
                },
                "error": {
                    "type": "object",
                    "properties": {"id": {"type": "string"}, "message": {"type": "string"}},
                },
            },
        },
    }


@pytest.fixture
def vpcs_doc():
    """Responses composed with allOf over referenced schemas."""
    return {
        "openapi": "3.0.0",
        "paths": {},
        "components": {
            "responses": {
                "all_vpcs": {
                    "description": "VPCs",
                    "content": {
                        "application/json": {
                            "schema": {
                                "allOf": [
                                    {
                                        "type": "object",
                                        "properties": {
                                            "vpcs": {"type": "array", "items": {"$ref": "#/components/schemas/vpc"}}
                                        },
                                    },
                                    {"$ref": "#/components/schemas/pagination"},
                                    {"$ref": "#/components/schemas/meta"},
                                ]
                            }
                        }
                    },
                }
            },
            "schemas": {
                "vpc": {
                    "allOf": [
                        {"$ref": "#/components/schemas/vpc_updatable"},
                        {"$ref": "#/components/schemas/vpc_create"},
                        {"$ref": "#/components/schemas/vpc_default"},
                        {"$ref": "#/components/schemas/vpc_base"},
                    ]
                },
                "vpc_updatable": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}, "description": {"type": "string"}},
                },
                "vpc_create": {"type": "object", "properties": {"region": {"type": "string"}}},
                "vpc_default": {"type": "object", "properties": {"default": {"type": "boolean"}}},
                "vpc_base": {
                    "type": "object",
                    "properties": {"id": {"type": "string"}, "created_at": {"type": "string", "format": "date-time"}},
                },
                "pagination": {"type": "object", "properties": {"links": {"type": "object"}}},
                "meta": {
                    "type": "object",
                    "properties": {"meta": {"type": "object", "properties": {"total": {"type": "integer"}}}},
                    "required": ["meta"],
                },
            },
        },
    }


@pytest.fixture
def billing_doc():
    """A document whose vendor extension holds a ref that does not resolve."""
    return {
        "openapi": "3.0.0",
        "paths": {
            "/billing/v1/costs": {
                "get": {
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/billing.v1.CostList"}
                                }
                            }
                        }
                    }
                }
            }
        },
        "components": {
            "schemas": {
                "billing.v1.CostList": {
                    "type": "object",
                    "properties": {
                        "data": {"type": "array", "items": {"$ref": "#/components/schemas/billing.v1.Cost"}},
                        "metadata": {"$ref": "#/components/schemas/billing.v1.ListMetadata"},
                    },
                },
                "billing.v1.Cost": {"type": "object", "properties": {"amount": {"type": "number"}}},
                "billing.v1.ListMetadata": {
                    "type": "object",
                    "properties": {"next": {"type": "string"}, "total_size": {"type": "integer"}},
                },
            },
            "x-stackQL-resources": {
                "costs": {
                    "methods": {
                        "list_costs": {
                            "operation": {"$ref": "#/paths/~1billing~1v1~1costs/get"},
                            "response": {"mediaType": "application/json", "openAPIDocKey": "200"},
                        }
                    },
                    "sqlVerbs": {"select": [{"$ref": "#/components/x-stackQL-resources/costs/methods/missing"}]},
                }
            },
        },
    }
