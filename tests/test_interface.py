"""
Tests for the interface descriptor and the Generate URL action.
"""

import json
import unittest

from permalinker.interface import (
    PERMALINK_GENERATOR,
    InterfaceDefinition,
    InterfaceRegistry,
    OptionField,
    generate_permalink,
    interface_registry,
)
from permalinker.models import DEFAULT_PLACEHOLDER, PathOptions, Record
from permalinker.resolvers import MappingResolver


class TestInterfaceDefinition(unittest.TestCase):
    """Test the built-in permalink interface descriptor."""

    def test_metadata(self):
        """Test id, label and icon."""
        self.assertEqual(PERMALINK_GENERATOR.id, "permalink-generator")
        self.assertEqual(PERMALINK_GENERATOR.name, "Permalink Generator")
        self.assertEqual(PERMALINK_GENERATOR.icon, "link")
        self.assertEqual(PERMALINK_GENERATOR.types, ["string"])

    def test_option_defaults(self):
        """Test option names and defaults."""
        self.assertEqual(PERMALINK_GENERATOR.defaults(), {
            "titleField": "title",
            "parentField": "parent",
            "urlPrefix": "/",
            "placeholder": DEFAULT_PLACEHOLDER,
        })

    def test_defaults_build_default_options(self):
        """Test the descriptor defaults agree with PathOptions."""
        options = PathOptions.coerce(PERMALINK_GENERATOR.defaults())
        self.assertEqual(options.model_dump(), PathOptions().model_dump())

    def test_get_option(self):
        """Test looking up a single option."""
        option = PERMALINK_GENERATOR.get_option("urlPrefix")
        self.assertEqual(option.type, "string")
        self.assertIsNone(PERMALINK_GENERATOR.get_option("slashAtStart"))

    def test_to_dict_is_json_ready(self):
        """Test the descriptor serializes to JSON."""
        data = json.loads(json.dumps(PERMALINK_GENERATOR.to_dict()))
        self.assertEqual(data["id"], "permalink-generator")
        self.assertEqual([option["field"] for option in data["options"]],
                         ["titleField", "parentField", "urlPrefix", "placeholder"])


class TestInterfaceRegistry(unittest.TestCase):
    """Test interface registry functionality."""

    def test_default_interface_registered(self):
        """Test the permalink interface is registered by default."""
        registry = InterfaceRegistry()
        self.assertIn("permalink-generator", registry.list_interfaces())
        self.assertIs(interface_registry.get_interface("permalink-generator"), PERMALINK_GENERATOR)

    def test_custom_interface_registration(self):
        """Test registering another interface."""
        registry = InterfaceRegistry()
        registry.register_interface(InterfaceDefinition(
            id="slug-generator",
            name="Slug Generator",
            description="Slug from title",
            icon="title",
            options=[OptionField(field="titleField", name="Title Field Name", type="string", default="title")]
        ))

        self.assertEqual(len(registry.list_interfaces()), 2)
        self.assertEqual(registry.get_interface("slug-generator").defaults(), {"titleField": "title"})
        self.assertIsNone(registry.get_interface("unknown"))


class TestGeneratePermalink(unittest.TestCase):
    """Test the Generate URL action."""

    def setUp(self):
        """Set up test fixtures."""
        self.pages = [Record(id=1, title="Home"), Record(id=2, title="Services", parent=1)]
        self.resolver = MappingResolver(self.pages)

    def test_returns_copy_of_record(self):
        """Test the permalink is written to a copy."""
        draft = Record(id=3, title="Web Design", parent=2)
        updated = generate_permalink(draft, self.resolver)

        self.assertEqual(updated.get("permalink"), "/home/services/web-design")
        self.assertIsNone(draft.get("permalink"))
        self.assertEqual(updated.id, 3)

    def test_mapping_record(self):
        """Test dictionaries with a custom target field."""
        draft = {"title": "SEO", "parent": {"id": 2}}
        updated = generate_permalink(draft, self.resolver, {"urlPrefix": ""}, permalink_field="url")

        self.assertEqual(updated["url"], "home/services/seo")
        self.assertNotIn("url", draft)

    def test_placeholder_written_for_untitled_record(self):
        """Test an untitled root gets the placeholder."""
        updated = generate_permalink({"id": 5}, self.resolver, {"placeholder": "pending"})
        self.assertEqual(updated["permalink"], "pending")
