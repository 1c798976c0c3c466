"""
Scenario CLI 入口

不透過 pytest 直接執行 scenario，輸出每個 scenario 的 PASS / FAIL / SKIP。

用法:
    # 列出所有 scenario
    python -m scenarios --list

    # 執行指定 scenario
    python -m scenarios --run login_logout invalid_password

    # 全部執行（指定環境、瀏覽器）
    python -m scenarios --all --env staging --browser firefox --no-headless
"""

import argparse
import sys
from pathlib import Path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="登入流程 scenario 執行器",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--list", action="store_true", help="列出所有 scenario")
    mode.add_argument("--run", nargs="+", metavar="ID", help="執行指定 scenario")
    mode.add_argument("--all", action="store_true", help="執行全部 scenario")
    mode.add_argument("--tag", help="執行含指定 tag 的 scenario")

    parser.add_argument("--env", default=None, help="環境: dev / staging / prod")
    parser.add_argument("--browser", choices=["chrome", "firefox"], default=None)
    parser.add_argument(
        "--headless", action=argparse.BooleanOptionalAction, default=None,
        help="是否以 headless 模式執行 (預設讀取 HEADLESS)",
    )
    parser.add_argument("--report", type=Path, default=None, help="JSON 報告路徑")

    args = parser.parse_args(argv)

    from core.driver_manager import DriverManager
    from core.env_manager import env
    from core.exceptions import UnknownScenarioError
    from core.runner import FlowRunner
    from scenarios import build_parameters, registry
    from utils.report import VerdictReport

    if args.list:
        for scenario in registry:
            flag = " (skip)" if scenario.skipped else ""
            tags = ",".join(sorted(scenario.tags))
            print(f"  {scenario.scenario_id:<22} {scenario.title}{flag}  [{tags}]")
        return 0

    if args.env:
        env.switch(args.env)

    try:
        selected = registry.select(ids=args.run, tag=args.tag)
    except UnknownScenarioError as e:
        print(e)
        return 2
    if not selected:
        print("沒有符合條件的 scenario")
        return 1

    params = build_parameters()
    runner = FlowRunner(screenshot_on_fail=env.get("screenshot_on_fail", True))
    report = VerdictReport().attach()
    try:
        runner.run_all(
            selected, params,
            lambda: DriverManager.create_session(args.browser, args.headless),
        )
    finally:
        report.detach()

    print(report.render())
    report.write(args.report)
    return 1 if report.counts()["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
