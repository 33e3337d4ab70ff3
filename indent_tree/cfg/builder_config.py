"""构建器配置 - 统一管理缩进树构建器的可调参数与配置加载逻辑"""
import os
import json
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError, field_validator

from indent_tree.typedef.cmd_data_types import Colors


class BuilderConfig(BaseModel):
    """缩进树构建器配置

    root_tag / line_tag / body_tag: 合成节点的标签名
    text_attr: 默认line节点保存原始行内容的属性名
    comment_prefix: 注释起始符，从该符号到行尾的内容被丢弃
    strict: 为True时构建错误直接抛出，不再返回部分结果
    print_level: DEBUG_PRINT输出级别 0~3
    """
    root_tag: str = "root"
    line_tag: str = "line"
    body_tag: str = "body"
    text_attr: str = "text"
    comment_prefix: str = Field(default="#", min_length=1)
    strict: bool = False
    print_level: int = Field(default=1, ge=0, le=3)

    @field_validator("root_tag", "line_tag", "body_tag", "text_attr")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value or not value.replace("-", "_").replace(".", "_").isidentifier():
            raise ValueError(f"'{value}' is not a valid tag or attribute name")
        return value


class ConfigLoader:
    """配置加载器

    所有方法均为静态方法，可独立使用。加载失败时打印错误信息并回退到默认配置。
    """

    @staticmethod
    def load_builder_config(config_file_path: str) -> BuilderConfig:
        """从JSON文件加载构建器配置

        Args:
            config_file_path: 配置文件路径

        Returns:
            BuilderConfig: 构建器配置，加载失败时返回默认配置
        """
        if not os.path.exists(config_file_path):
            print(f"  {Colors.FAIL}错误: 配置文件不存在: {config_file_path}{Colors.ENDC}")
            return BuilderConfig()

        try:
            with open(config_file_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"  {Colors.FAIL}错误: 读取配置文件失败: {e}{Colors.ENDC}")
            return BuilderConfig()

        return ConfigLoader.build_config(config_dict)

    @staticmethod
    def build_config(config_dict: Dict[str, Any]) -> BuilderConfig:
        """从字典构建配置，只接受已知字段"""
        if not isinstance(config_dict, dict):
            print(f"  {Colors.FAIL}错误: 配置内容必须是JSON对象{Colors.ENDC}")
            return BuilderConfig()

        known_fields = set(BuilderConfig.model_fields)
        unknown_fields = [key for key in config_dict if key not in known_fields]
        if unknown_fields:
            print(f"  {Colors.WARNING}警告: 忽略未知配置项: {', '.join(unknown_fields)}{Colors.ENDC}")

        try:
            return BuilderConfig(**{k: v for k, v in config_dict.items() if k in known_fields})
        except ValidationError as e:
            print(f"  {Colors.FAIL}错误: 配置校验失败: {e}{Colors.ENDC}")
            return BuilderConfig()
