#!/usr/bin/env python3
"""配置系统测试模块

测试ConfigManager的配置加载、合并、点路径访问以及对日志和元素性质表的应用。
"""

import logging

import pytest
import yaml

from simframe.core.config import DEFAULT_CONFIG_PATH, ConfigManager
from simframe.core.errors import FormatError
from simframe.core.periodic_table import PeriodicTable


class TestConfigManagerBasic:
    """基本配置加载测试"""

    def test_empty_config_initialization(self):
        """测试不加载默认值时为空配置"""
        cfg = ConfigManager(use_defaults=False)
        assert cfg.data == {}
        assert cfg.sources == []

    def test_defaults_loaded(self):
        """测试默认配置"""
        cfg = ConfigManager()
        assert cfg.get("logging.level") == "WARNING"
        assert cfg.get("logging.file") is None
        assert cfg.get("elements.overrides") == {}
        assert cfg.sources == [str(DEFAULT_CONFIG_PATH)]

    def test_single_file_loading(self, tmp_path):
        """测试单个YAML文件加载"""
        config_file = tmp_path / "test.yaml"
        config_data = {
            "logging": {"level": "DEBUG"},
            "elements": {"overrides": {"CT": {"element": "C"}}},
        }
        config_file.write_text(yaml.dump(config_data))

        cfg = ConfigManager(files=[str(config_file)])
        assert cfg.get("logging.level") == "DEBUG"
        assert cfg.get("elements.overrides.CT.element") == "C"
        # 默认值中未被覆盖的部分保持
        assert cfg.get("logging.datefmt") == "%H:%M:%S"

    def test_multiple_file_merging(self, tmp_path):
        """测试多个配置文件合并"""
        # 基础配置
        base_config = tmp_path / "base.yaml"
        base_data = {
            "logging": {"level": "INFO", "file": "base.log"},
            "elements": {"overrides": {"CT": {"element": "C"}}},
        }
        base_config.write_text(yaml.dump(base_data))

        # 覆盖配置
        override_config = tmp_path / "override.yaml"
        override_data = {
            "logging": {"level": "ERROR"},  # 覆盖级别
            "elements": {"overrides": {"OW": {"element": "O"}}},  # 新增类型
        }
        override_config.write_text(yaml.dump(override_data))

        cfg = ConfigManager(
            files=[str(base_config), str(override_config)], use_defaults=False
        )

        # 验证覆盖
        assert cfg.get("logging.level") == "ERROR"  # 被覆盖
        assert cfg.get("logging.file") == "base.log"  # 保持原值
        assert cfg.get("elements.overrides.CT.element") == "C"  # 保持原值
        assert cfg.get("elements.overrides.OW.element") == "O"  # 新增
        assert cfg.sources == [str(base_config), str(override_config)]

    def test_nonexistent_file_handling(self, caplog):
        """测试不存在文件的处理"""
        # 不存在的文件会被跳过，而不是抛出异常
        with caplog.at_level(logging.WARNING, logger="simframe.core.config"):
            cfg = ConfigManager(files=["nonexistent.yaml"], use_defaults=False)
        assert cfg.data == {}
        assert "nonexistent.yaml" in caplog.text


class TestConfigManagerAccess:
    """配置访问和查询测试"""

    @pytest.fixture
    def sample_config(self, tmp_path):
        """创建示例配置"""
        config_file = tmp_path / "sample.yaml"
        config_data = {
            "name": "frame",
            "cell": {"lengths": [10.0, 20.0, 30.0], "shape": "orthorhombic"},
            "nested": {"deep": {"value": 42}},
        }
        config_file.write_text(yaml.dump(config_data))
        return ConfigManager(files=[str(config_file)], use_defaults=False)

    def test_simple_path_access(self, sample_config):
        """测试简单路径访问"""
        assert sample_config.get("name") == "frame"
        assert sample_config.get("cell.shape") == "orthorhombic"

    def test_nested_path_access(self, sample_config):
        """测试深层嵌套路径访问"""
        assert sample_config.get("nested.deep.value") == 42

    def test_default_value_handling(self, sample_config):
        """测试默认值处理"""
        assert sample_config.get("nonexistent.path") is None
        assert sample_config.get("nonexistent.path", "default") == "default"
        assert sample_config.get("cell.nonexistent", 100.0) == 100.0

    def test_type_preservation(self, sample_config):
        """测试数据类型保持"""
        assert sample_config.get("cell.lengths") == [10.0, 20.0, 30.0]
        assert isinstance(sample_config.get("nested.deep.value"), int)

    def test_path_through_scalar(self, sample_config):
        """测试穿过标量的路径"""
        assert sample_config.get("name.value") is None


class TestConfigManagerApply:
    """配置应用测试"""

    def test_apply_element_overrides(self, tmp_path):
        """测试注册自定义原子类型"""
        config_file = tmp_path / "elements.yaml"
        config_data = {
            "elements": {
                "overrides": {
                    "CT": {"element": "C"},
                    "OW": {"element": "O", "name": "Water oxygen", "mass": 16.0},
                }
            }
        }
        config_file.write_text(yaml.dump(config_data))

        table = PeriodicTable.default()
        cfg = ConfigManager(files=[str(config_file)])
        assert cfg.apply_element_overrides(table) == 2
        assert table.lookup("CT").atomic_number == 6
        assert table.lookup("OW").name == "Water oxygen"
        assert table.lookup("OW").mass == 16.0

    def test_apply_element_overrides_invalid(self, tmp_path):
        """测试overrides不是映射"""
        config_file = tmp_path / "elements.yaml"
        config_file.write_text(yaml.dump({"elements": {"overrides": ["CT"]}}))

        cfg = ConfigManager(files=[str(config_file)])
        with pytest.raises(FormatError, match="elements.overrides"):
            cfg.apply_element_overrides(PeriodicTable.default())

    @pytest.mark.parametrize(
        "entry, message",
        [
            ({"element": "Xx"}, "not found"),
            ({"element": "C", "spin": 1}, "未知字段"),
            ({"element": "C", "mass": -1.0}, "原子质量不能为负数"),
            (3, "elements.overrides"),
        ],
    )
    def test_apply_element_overrides_bad_entry(self, tmp_path, entry, message):
        """测试无效的类型条目统一报告为格式错误"""
        config_file = tmp_path / "elements.yaml"
        config_file.write_text(yaml.dump({"elements": {"overrides": {"CT": entry}}}))

        cfg = ConfigManager(files=[str(config_file)])
        with pytest.raises(FormatError, match=message) as excinfo:
            cfg.apply_element_overrides(PeriodicTable.default())
        assert excinfo.value.__cause__ is not None

    def test_apply_element_overrides_empty(self):
        """测试默认配置不注册任何类型"""
        table = PeriodicTable.default()
        size = len(table)
        assert ConfigManager().apply_element_overrides(table) == 0
        assert len(table) == size

    def test_apply_logging(self, tmp_path, restore_root_logger):
        """测试按配置设置日志级别"""
        config_file = tmp_path / "logging.yaml"
        config_file.write_text(yaml.dump({"logging": {"level": "ERROR"}}))

        ConfigManager(files=[str(config_file)]).apply_logging()
        assert restore_root_logger.level == logging.ERROR


class TestConfigManagerEdgeCases:
    """边界情况和错误处理测试"""

    def test_empty_yaml_file(self, tmp_path):
        """测试空YAML文件"""
        empty_file = tmp_path / "empty.yaml"
        empty_file.write_text("")

        cfg = ConfigManager(files=[str(empty_file)], use_defaults=False)
        assert cfg.data == {}

    def test_malformed_yaml_handling(self, tmp_path):
        """测试格式错误的YAML文件"""
        bad_file = tmp_path / "bad.yaml"
        bad_file.write_text("invalid: yaml: content: [unclosed")

        with pytest.raises(FormatError, match="无法解析配置文件"):
            ConfigManager(files=[str(bad_file)])

    def test_non_mapping_yaml(self, tmp_path):
        """测试顶层不是映射的YAML文件"""
        list_file = tmp_path / "list.yaml"
        list_file.write_text(yaml.dump([1, 2, 3]))

        with pytest.raises(FormatError, match="顶层必须是映射"):
            ConfigManager(files=[str(list_file)])

    def test_format_error_is_value_error(self, tmp_path):
        """测试格式错误也可以按ValueError捕获"""
        bad_file = tmp_path / "bad.yaml"
        bad_file.write_text("[unclosed")

        with pytest.raises(ValueError):
            ConfigManager(files=[str(bad_file)])

    def test_path_with_empty_segments(self, tmp_path):
        """测试包含空段的路径"""
        config_file = tmp_path / "test.yaml"
        config_data = {"test": {"value": 123}}
        config_file.write_text(yaml.dump(config_data))

        cfg = ConfigManager(files=[str(config_file)])

        # 路径中的空段应该被正确处理
        assert cfg.get("test..value") is None  # 双点
        assert cfg.get(".test.value") is None  # 开头的点
        assert cfg.get("test.value.") is None  # 结尾的点
