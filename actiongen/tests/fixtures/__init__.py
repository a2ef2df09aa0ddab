"""Test fixtures for actiongen tests.

This module provides sample OpenAPI documents and utilities for testing
the code generation functionality.
"""

# Minimal OpenAPI 3.0 spec for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# One operation with a path parameter and an object response
ITEM_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Item API', 'version': '1.0.0'},
    'paths': {
        '/items/{id}': {
            'get': {
                'parameters': [
                    {
                        'name': 'id',
                        'in': 'path',
                        'required': True,
                        'schema': {'type': 'integer'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'The item',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {
                                        'id': {'type': 'integer'},
                                        'name': {'type': 'string'},
                                    },
                                    'required': ['id'],
                                }
                            }
                        },
                    }
                },
            }
        }
    },
}

# A request body given by reference to a component schema
CREATE_PET_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Pet API', 'version': '1.0.0'},
    'paths': {
        '/pets': {
            'post': {
                'operationId': 'createPet',
                'requestBody': {
                    'required': True,
                    'content': {
                        'application/json': {
                            'schema': {'$ref': '#/components/schemas/Pet'}
                        }
                    },
                },
                'responses': {'201': {'description': 'Created'}},
            }
        }
    },
    'components': {
        'schemas': {
            'Pet': {
                'type': 'object',
                'properties': {
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                },
                'required': ['name'],
            }
        }
    },
}

# Required and optional query parameters
SEARCH_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Search API', 'version': '1.0.0'},
    'paths': {
        '/search': {
            'get': {
                'parameters': [
                    {
                        'name': 'q',
                        'in': 'query',
                        'required': True,
                        'schema': {'type': 'string'},
                    },
                    {'name': 'limit', 'in': 'query', 'schema': {'type': 'integer'}},
                ],
                'responses': {'200': {'description': 'Results'}},
            }
        }
    },
}

# No parameters, no body, no response schema
PING_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Ping API', 'version': '1.0.0'},
    'paths': {
        '/ping': {
            'get': {
                'responses': {'204': {'description': 'Alive'}},
            }
        }
    },
}

# Petstore-like API with shared components and several operations
PETSTORE_SPEC = {
    'openapi': '3.0.0',
    'info': {
        'title': 'Petstore API',
        'version': '1.0.0',
        'description': 'A sample Petstore API for testing',
    },
    'servers': [{'url': 'https://petstore.example.com/api/v1'}],
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'summary': 'List all pets',
                'parameters': [{'$ref': '#/components/parameters/Limit'}],
                'responses': {
                    '200': {
                        'description': 'A list of pets',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'array',
                                    'items': {'$ref': '#/components/schemas/Pet'},
                                }
                            }
                        },
                    }
                },
            },
            'post': {
                'operationId': 'createPet',
                'summary': 'Create a pet',
                'requestBody': {'$ref': '#/components/requestBodies/NewPet'},
                'responses': {'201': {'description': 'Created'}},
            },
        },
        '/pets/{petId}': {
            'parameters': [
                {
                    'name': 'petId',
                    'in': 'path',
                    'required': True,
                    'schema': {'type': 'integer'},
                }
            ],
            'get': {
                'operationId': 'showPetById',
                'summary': 'Info for a specific pet',
                'description': 'Returns a single pet.',
                'responses': {'200': {'$ref': '#/components/responses/PetResponse'}},
            },
            'delete': {
                'operationId': 'deletePet',
                'deprecated': True,
                'parameters': [
                    {
                        'name': 'X-Request-Id',
                        'in': 'header',
                        'schema': {'type': 'string'},
                    }
                ],
                'responses': {'204': {'description': 'Deleted'}},
            },
        },
    },
    'components': {
        'schemas': {
            'Pet': {
                'type': 'object',
                'required': ['id', 'name'],
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                    'status': {
                        'type': 'string',
                        'enum': ['available', 'pending', 'sold'],
                    },
                },
            },
            'NewPet': {
                'type': 'object',
                'required': ['name'],
                'properties': {
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                },
            },
        },
        'parameters': {
            'Limit': {
                'name': 'limit',
                'in': 'query',
                'required': False,
                'schema': {'type': 'integer'},
            }
        },
        'requestBodies': {
            'NewPet': {
                'required': True,
                'content': {
                    'application/json': {
                        'schema': {'$ref': '#/components/schemas/NewPet'}
                    }
                },
            }
        },
        'responses': {
            'PetResponse': {
                'description': 'A pet',
                'content': {
                    'application/json': {'schema': {'$ref': '#/components/schemas/Pet'}}
                },
            }
        },
    },
}

# A schema that refers back to itself
CYCLIC_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Linked List API', 'version': '1.0.0'},
    'paths': {
        '/nodes/{id}': {
            'get': {
                'operationId': 'getNode',
                'parameters': [
                    {
                        'name': 'id',
                        'in': 'path',
                        'required': True,
                        'schema': {'type': 'string'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'A node',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Node'}
                            }
                        },
                    }
                },
            }
        }
    },
    'components': {
        'schemas': {
            'Node': {
                'type': 'object',
                'properties': {
                    'value': {'type': 'number'},
                    'next': {'$ref': '#/components/schemas/Node'},
                },
            }
        }
    },
}

# A response pointing at a component that does not exist
BROKEN_REF_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Broken API', 'version': '1.0.0'},
    'paths': {
        '/widgets': {
            'get': {
                'operationId': 'listWidgets',
                'responses': {
                    '200': {
                        'description': 'Widgets',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Missing'}
                            }
                        },
                    }
                },
            }
        }
    },
    'components': {'schemas': {}},
}

# Two operations that derive the same identifier
COLLIDING_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Colliding API', 'version': '1.0.0'},
    'paths': {
        '/a': {
            'get': {
                'operationId': 'fetchThing',
                'responses': {'200': {'description': 'A'}},
            }
        },
        '/b': {
            'get': {
                'operationId': 'fetchThing',
                'responses': {'200': {'description': 'B'}},
            }
        },
    },
}

# Paths and methods declared out of alphabetical order
UNSORTED_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Unsorted API', 'version': '1.0.0'},
    'paths': {
        '/zebras': {
            'put': {'operationId': 'replaceZebras', 'responses': {}},
            'get': {'operationId': 'listZebras', 'responses': {}},
        },
        '/apples': {
            'get': {'operationId': 'listApples', 'responses': {}},
        },
    },
}

SWAGGER_SPEC = {
    'swagger': '2.0',
    'info': {'title': 'Legacy API', 'version': '1.0.0'},
    'paths': {},
}


def get_spec_as_json(spec: dict) -> str:
    """Convert a spec dictionary to JSON string."""
    import json

    return json.dumps(spec, indent=2)


def get_spec_as_yaml(spec: dict) -> str:
    """Convert a spec dictionary to YAML string, keeping key order."""
    import yaml

    return yaml.dump(spec, default_flow_style=False, sort_keys=False)
