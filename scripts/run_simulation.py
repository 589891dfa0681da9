#!/usr/bin/env python
"""
Reactor Core Simulation - Main Runner Script

This script runs the headless reactor core simulation.

Usage:
    python run_simulation.py
    python run_simulation.py -n 6000 --rod 20
    python run_simulation.py --rod 10 --scram-at 1800 --no-plot

Output files (Data/, Figures/) will be saved in the project directory
or in the specified output directory.
"""

from pathlib import Path
import sys

# 添加项目根目录到路径（确保可以导入 reactor_simulation）
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from reactor_simulation.runner import run_full_simulation, main as runner_main


def main():
    """脚本入口点"""
    if len(sys.argv) > 1:
        # 如果有命令行参数，使用 argparse 处理
        runner_main()
    else:
        # 默认运行 - 抽出控制棒后按下 AZ-5，输出到项目目录
        run_full_simulation(output_dir=project_dir, rod_position=0, scram_at_tick=1800)


if __name__ == "__main__":
    main()
