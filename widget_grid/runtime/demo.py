"""
布局会话演示

用内存存储跑一遍完整的编辑流程，验证架构跑通:
加载旧数据 -> 新建 -> 拖拽 -> 调整尺寸 -> 切换视图 -> 存储失败

用法:
    python -m widget_grid.runtime.demo [--config CONFIG] [--output-dir DIR]
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from widget_grid.audit.journal import AuditJournal
from widget_grid.config.loader import load_config
from widget_grid.config.schema import LayoutConfig
from widget_grid.config.validator import ConfigValidator
from widget_grid.layout_engine.collision import find_collisions
from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import WidgetSize, WidgetType
from widget_grid.persistence.memory_store import InMemoryWidgetStore
from widget_grid.runtime.session import LayoutSession
from widget_grid.utils.log import configure_logging

DEMO_PAGE = "demo-page"

# 旧数据：三个 widget 共享同一 mobile 位置（JSON 字符串），一个位置畸形
LEGACY_RECORDS = [
    {
        "id": "w1",
        "widget_type": "link",
        "size": "thin",
        "web_position": '{"x":20,"y":20}',
        "mobile_position": '{"x":20,"y":20}',
        "title": "Portfolio",
    },
    {
        "id": "w2",
        "widget_type": "social",
        "size": "small-square",
        "web_position": {"x": 360, "y": 20},
        "mobile_position": '{"x":20,"y":20}',
        "platform": "github",
    },
    {
        "id": "w3",
        "widget_type": "text",
        "size": "wide",
        "web_position": "{not json",
        "mobile_position": '{"x":20,"y":20}',
    },
]


def print_layout(session: LayoutSession, view_mode: ViewMode) -> None:
    """打印指定视图的布局"""
    print(f"   [{view_mode.value}] canvas height {session.canvas_height(view_mode)}")
    for widget in session.widgets:
        pos = widget.position_in(view_mode)
        print(f"   {widget.id:<6} {widget.size_tag:<14} ({pos.x}, {pos.y})")


def count_overlaps(session: LayoutSession, view_mode: ViewMode) -> int:
    """统计视图中的重叠对数"""
    widgets = session.widgets
    total = 0
    for i, widget in enumerate(widgets):
        total += len(find_collisions(
            widget,
            widgets[i + 1:],
            view_mode,
            margin=session.config.grid.margin,
            mobile_tile_size=session.config.mobile.tile_size,
        ))
    return total


def run_demo(config_path: Optional[str], output_dir: str) -> bool:
    """
    运行演示

    Args:
        config_path: 配置文件路径（可选，缺省用默认配置）
        output_dir: 审计日志输出目录

    Returns:
        是否成功（两个视图都没有重叠）
    """
    print("=" * 60)
    print("Widget Grid Layout Demo")
    print("=" * 60)

    # 1. 加载配置
    print("\n1. Loading config...")
    config = load_config(config_path) if config_path else LayoutConfig()
    configure_logging(config.logging.level, config.logging.log_file)
    print(f"   Grid unit: {config.grid.unit}, margin: {config.grid.margin}")

    # 2. 校验配置
    print("\n2. Validating config...")
    result = ConfigValidator().validate(config)
    print(f"   Valid: {result.is_valid}")
    if result.violations:
        print(f"   Violations: {result.violations}")
        return False
    if result.warnings:
        print(f"   Warnings: {result.warnings}")

    # 3. 创建会话并加载旧数据
    print("\n3. Loading legacy widgets...")
    store = InMemoryWidgetStore(pages={DEMO_PAGE: [dict(r) for r in LEGACY_RECORDS]})
    journal = AuditJournal(output_dir, config.audit.filename)
    session = LayoutSession(config, store, DEMO_PAGE, audit_journal=journal)
    session.start()
    print_layout(session, ViewMode.DESKTOP)
    print_layout(session, ViewMode.MOBILE)

    # 4. 新建 + 拖拽
    print("\n4. Adding and dragging widgets...")
    session.add_widget("w4", WidgetType.IMAGE, WidgetSize.MEDIUM_SQUARE)
    session.begin_drag("w4")
    preview = session.preview_drag(Point(30, 30))
    landed = session.drop(Point(30, 30))
    print(f"   w4 preview {preview} landed {landed}")

    # 5. 调整尺寸
    print("\n5. Resizing w1 to large-square...")
    session.resize_widget("w1", WidgetSize.LARGE_SQUARE)

    # 6. 切换视图并在移动端拖拽，同时模拟存储失败
    print("\n6. Mobile drag with a failing store...")
    session.toggle_view()
    store.fail_next(1)
    session.move_widget("w2", Point(0, 0))
    for note in session.notifications:
        print(f"   [{note.level}] {note.message}")

    print("\n7. Final layout...")
    print_layout(session, ViewMode.DESKTOP)
    print_layout(session, ViewMode.MOBILE)

    overlaps = count_overlaps(session, ViewMode.DESKTOP) + count_overlaps(session, ViewMode.MOBILE)
    session.close()

    audit_file = Path(output_dir) / config.audit.filename
    with open(audit_file, "r", encoding="utf-8") as f:
        events = [json.loads(line) for line in f if line.strip()]
    print(f"\n   Audit events: {len(events)}")
    print(f"   Overlapping pairs: {overlaps}")

    print("\n" + "=" * 60)
    print("Demo " + ("PASSED" if overlaps == 0 else "FAILED"))
    print("=" * 60)

    return overlaps == 0


def main() -> int:
    # .env 可提供 WIDGET_GRID_CONFIG / WIDGET_GRID_AUDIT_DIR
    load_dotenv()

    parser = argparse.ArgumentParser(description="Widget grid layout demo")
    parser.add_argument(
        "--config", type=str, default=os.getenv("WIDGET_GRID_CONFIG"), help="Layout config YAML"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=os.getenv("WIDGET_GRID_AUDIT_DIR", "output/demo"),
        help="Audit output directory",
    )
    args = parser.parse_args()

    success = run_demo(args.config, args.output_dir)
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
