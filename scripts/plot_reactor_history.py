#!/usr/bin/env python
"""
Reactor History Visualization Script

This script plots the reading history of a previous reactor run.

Usage:
    python plot_reactor_history.py
    python plot_reactor_history.py --data-file Data/reactor_history.csv
    python plot_reactor_history.py --show
"""

from pathlib import Path
import sys
import argparse

# 添加项目根目录到路径
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from reactor_simulation import config, load_history_from_csv
from reactor_simulation.plotting import visualize_reactor_history, print_statistics


def main():
    """脚本入口点"""
    parser = argparse.ArgumentParser(description="Plot reactor run history")
    parser.add_argument("--data-file", type=Path, default=None,
                        help="Path to history data CSV file")
    parser.add_argument("--show", action="store_true",
                        help="Open an interactive window")

    args = parser.parse_args()

    # 确定数据文件路径
    data_dir = project_dir / config.DATA_OUTPUT_DIR
    figures_dir = project_dir / config.FIGURES_OUTPUT_DIR

    if args.data_file:
        history_file = args.data_file
    else:
        history_file = data_dir / config.HISTORY_DATA_CSV

    if not history_file.exists():
        print(f"[error] History file not found: {history_file}")
        print("[info] Please run run_simulation.py first to generate history data.")
        sys.exit(1)

    print(f"[info] Loading reactor history from {history_file}")
    records = load_history_from_csv(history_file)
    print(f"[info] Loaded {len(records)} ticks")

    figures_dir.mkdir(parents=True, exist_ok=True)
    save_base = str(figures_dir / config.HISTORY_FIGURE_BASE)

    print("[info] Creating history plot...")
    visualize_reactor_history(records, save_path=save_base, dpi=config.QUICK_PLOT_DPI, show=args.show)
    print_statistics(records)

    print("[info] Visualization complete!")


if __name__ == "__main__":
    main()
