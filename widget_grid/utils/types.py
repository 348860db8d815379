"""
类型定义
"""

from typing import NewType

# Widget ID: 页面内唯一的不透明字符串
WidgetId = NewType("WidgetId", str)

# Page ID: 存储层页面标识
PageId = NewType("PageId", str)

# Session ID: 格式 s{YYYYMMDD}_{HHmmss}
SessionId = NewType("SessionId", str)

# Config Hash: 配置文件的 SHA256 哈希前 8 位
ConfigHash = NewType("ConfigHash", str)
