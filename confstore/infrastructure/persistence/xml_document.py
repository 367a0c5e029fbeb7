"""
XML 配置文档 - 基础设施层

负责配置文件的解析、序列化和节点级修改。文件格式:

    <configurations>
      <setting name="key1" value="val1"/>
      <setting name="key2" value="val2"/>
    </configurations>
"""
import copy
from typing import BinaryIO, Dict, Iterator, List

from lxml import etree

from confstore.domain.entities import ConfigEntry
from confstore.domain.errors import InvalidFormatError


# XML 标签与属性名
ROOT_TAG = "configurations"
ENTRY_TAG = "setting"
NAME_ATTR = "name"
VALUE_ATTR = "value"


def _make_parser() -> etree.XMLParser:
    # 不解析外部实体，不访问网络
    return etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)


def _is_valid_name(name) -> bool:
    return isinstance(name, str) and bool(name.strip())


class ConfigDocument:
    """
    配置文档

    包装一棵 lxml 元素树，只认根节点下的 setting 子节点。
    缺少 value 属性、或 name 为空的 setting 节点不参与映射，
    但会原样保留在文档中，保存时一并写回。
    """

    def __init__(self, root: etree._Element):
        if root.tag != ROOT_TAG:
            raise InvalidFormatError(
                f"unexpected root tag '{root.tag}', expected '{ROOT_TAG}'"
            )
        self.root = root

    @classmethod
    def create_empty(cls) -> "ConfigDocument":
        """创建只包含空根节点的文档"""
        return cls(etree.Element(ROOT_TAG))

    @classmethod
    def parse(cls, stream: BinaryIO) -> "ConfigDocument":
        """
        从二进制流解析文档

        Raises:
            InvalidFormatError: XML 不合法或根节点不是 configurations
        """
        try:
            tree = etree.parse(stream, _make_parser())
        except etree.XMLSyntaxError as e:
            raise InvalidFormatError(f"malformed configuration XML: {e}") from e
        return cls(tree.getroot())

    # ============================================================
    # 读取
    # ============================================================

    def _setting_nodes(self) -> Iterator[etree._Element]:
        """所有有效的 setting 节点（文档顺序）"""
        for node in self.root.findall(ENTRY_TAG):
            if node.get(VALUE_ATTR) is None:
                continue
            if not _is_valid_name(node.get(NAME_ATTR)):
                continue
            yield node

    def entries(self) -> List[ConfigEntry]:
        """有效配置项列表，按文档顺序，可能包含重名项"""
        return [
            ConfigEntry(node.get(NAME_ATTR), node.get(VALUE_ATTR))
            for node in self._setting_nodes()
        ]

    def to_mapping(self) -> Dict[str, str]:
        """投影为 name -> value 映射，重名时后出现的覆盖先出现的"""
        mapping: Dict[str, str] = {}
        for entry in self.entries():
            mapping[entry.name] = entry.value
        return mapping

    def skipped_count(self) -> int:
        """被忽略的 setting 节点数量"""
        total = len(self.root.findall(ENTRY_TAG))
        return total - sum(1 for _ in self._setting_nodes())

    # ============================================================
    # 修改
    # ============================================================

    def append(self, name: str, value: str) -> None:
        """在末尾追加一个 setting 节点"""
        node = etree.SubElement(self.root, ENTRY_TAG)
        node.set(NAME_ATTR, name)
        node.set(VALUE_ATTR, value)

    def set_value(self, name: str, value: str) -> int:
        """
        改写同名 setting 节点的值

        Returns:
            被改写的节点数量
        """
        count = 0
        for node in self._setting_nodes():
            if node.get(NAME_ATTR) == name:
                node.set(VALUE_ATTR, value)
                count += 1
        return count

    def remove(self, name: str) -> int:
        """
        删除同名 setting 节点

        Returns:
            被删除的节点数量
        """
        targets = [node for node in self._setting_nodes() if node.get(NAME_ATTR) == name]
        for node in targets:
            self.root.remove(node)
        return len(targets)

    # ============================================================
    # 序列化
    # ============================================================

    def to_bytes(self, encoding: str = "utf-8", indent: int = 2,
                 xml_declaration: bool = True) -> bytes:
        """
        序列化为字节

        Args:
            encoding: 输出编码
            indent: 缩进空格数，0 表示不换行
            xml_declaration: 是否输出 XML 声明
        """
        root = copy.deepcopy(self.root)
        if indent > 0:
            etree.indent(root, space=" " * indent)
        text = etree.tostring(root, encoding="unicode") + "\n"
        if xml_declaration:
            text = f"<?xml version='1.0' encoding='{encoding}'?>\n" + text
        return text.encode(encoding, "xmlcharrefreplace")
