"""
ConfigDocument 单元测试
"""

import io

import pytest

from confstore.domain.entities import ConfigEntry
from confstore.domain.errors import InvalidFormatError
from confstore.infrastructure.persistence.xml_document import ConfigDocument, ROOT_TAG


def _parse(text: str) -> ConfigDocument:
    return ConfigDocument.parse(io.BytesIO(text.encode('utf-8')))


class TestParse:
    """解析测试"""

    def test_parses_entries_in_document_order(self, sample_xml):
        doc = _parse(sample_xml)

        assert doc.entries() == [
            ConfigEntry('theme', 'dark'),
            ConfigEntry('language', 'zh-CN'),
            ConfigEntry('timeout', '30'),
        ]

    def test_malformed_entries_are_skipped(self, malformed_entries_xml):
        """缺少 value 或 name 为空的节点不参与映射"""
        doc = _parse(malformed_entries_xml)

        assert doc.to_mapping() == {'ok': '1', 'also_ok': ''}
        assert doc.skipped_count() == 3

    def test_whitespace_name_is_skipped(self):
        doc = _parse('<configurations><setting name="  " value="x"/></configurations>')

        assert doc.to_mapping() == {}

    def test_duplicate_names_last_wins(self):
        doc = _parse(
            '<configurations>'
            '<setting name="a" value="first"/>'
            '<setting name="a" value="second"/>'
            '</configurations>'
        )

        assert doc.to_mapping() == {'a': 'second'}
        assert len(doc.entries()) == 2

    def test_wrong_root_tag_rejected(self):
        with pytest.raises(InvalidFormatError):
            _parse('<settings><setting name="a" value="1"/></settings>')

    def test_root_tag_is_case_sensitive(self):
        with pytest.raises(InvalidFormatError):
            _parse('<Configurations />')

    def test_malformed_xml_rejected(self):
        with pytest.raises(InvalidFormatError):
            _parse('<configurations><setting name="a" value="1">')

    def test_empty_input_rejected(self):
        with pytest.raises(InvalidFormatError):
            _parse('')

    def test_escaped_characters_decoded(self):
        doc = _parse('<configurations><setting name="q" value="a &lt;b&gt; &amp; &quot;c&quot;"/></configurations>')

        assert doc.to_mapping() == {'q': 'a <b> & "c"'}


class TestMutation:
    """节点修改测试"""

    def test_create_empty(self):
        doc = ConfigDocument.create_empty()

        assert doc.root.tag == ROOT_TAG
        assert doc.entries() == []

    def test_append(self):
        doc = ConfigDocument.create_empty()
        doc.append('a', '1')
        doc.append('b', '2')

        assert doc.entries() == [ConfigEntry('a', '1'), ConfigEntry('b', '2')]

    def test_set_value_rewrites_all_duplicates(self):
        doc = _parse(
            '<configurations>'
            '<setting name="a" value="1"/>'
            '<setting name="b" value="2"/>'
            '<setting name="a" value="3"/>'
            '</configurations>'
        )

        assert doc.set_value('a', '9') == 2
        assert [e.value for e in doc.entries()] == ['9', '2', '9']

    def test_set_value_missing_returns_zero(self):
        doc = ConfigDocument.create_empty()

        assert doc.set_value('missing', 'x') == 0

    def test_set_value_ignores_node_without_value(self):
        doc = _parse('<configurations><setting name="a"/></configurations>')

        assert doc.set_value('a', '1') == 0
        assert doc.to_mapping() == {}

    def test_remove_deletes_all_duplicates(self):
        doc = _parse(
            '<configurations>'
            '<setting name="a" value="1"/>'
            '<setting name="b" value="2"/>'
            '<setting name="a" value="3"/>'
            '</configurations>'
        )

        assert doc.remove('a') == 2
        assert doc.entries() == [ConfigEntry('b', '2')]


class TestSerialize:
    """序列化测试"""

    def test_empty_document(self):
        data = ConfigDocument.create_empty().to_bytes()

        assert data.startswith(b'<?xml')
        assert b'<configurations/>' in data
        assert data.endswith(b'\n')

    def test_setting_layout(self):
        doc = ConfigDocument.create_empty()
        doc.append('key1', 'val1')
        doc.append('key2', 'val2')

        text = doc.to_bytes().decode('utf-8')

        assert '<configurations>\n' in text
        assert '  <setting name="key1" value="val1"/>\n' in text
        assert '  <setting name="key2" value="val2"/>\n' in text
        assert text.rstrip().endswith('</configurations>')

    def test_without_indent_or_declaration(self):
        doc = ConfigDocument.create_empty()
        doc.append('a', '1')

        data = doc.to_bytes(indent=0, xml_declaration=False)

        assert data == b'<configurations><setting name="a" value="1"/></configurations>\n'

    def test_serialize_does_not_mutate_tree(self):
        doc = ConfigDocument.create_empty()
        doc.append('a', '1')

        doc.to_bytes(indent=4)

        assert doc.root.text is None

    def test_special_characters_survive(self):
        doc = ConfigDocument.create_empty()
        doc.append('path', 'C:\\temp\\<x> & "y"')

        reparsed = ConfigDocument.parse(io.BytesIO(doc.to_bytes()))

        assert reparsed.to_mapping() == {'path': 'C:\\temp\\<x> & "y"'}

    def test_unicode_value(self):
        doc = ConfigDocument.create_empty()
        doc.append('greeting', '你好')

        reparsed = ConfigDocument.parse(io.BytesIO(doc.to_bytes()))

        assert reparsed.to_mapping() == {'greeting': '你好'}

    def test_ignored_nodes_are_preserved(self, malformed_entries_xml):
        doc = _parse(malformed_entries_xml)

        text = doc.to_bytes().decode('utf-8')

        assert 'name="no_value"' in text
        assert '<comment name="other_tag" value="x"/>' in text
        assert _parse(text).skipped_count() == 3
