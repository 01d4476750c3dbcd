"""
저장된 캔버스 그림(JSON) → 코드 변환 워크플로우

워크플로우:
1. 그림 JSON 로드 (StrokeSurface)
2. 캡처 → OCR (로컬 Tesseract 또는 --remote 시 Google Vision)
3. 들여쓰기 복원 → 언어 템플릿에 병합
4. --run 지정 시 JDoodle로 실행

Usage:
    python -m workflows.codeify_drawing drawing.json
    python -m workflows.codeify_drawing drawing.json --remote --run --language "Python 3"
"""

import argparse
import asyncio
import sys
from pathlib import Path

from core.base import StrokeSurface
from core.jdoodle_client import JDoodleClient
from core.languages import DEFAULT_LANGUAGE, supported_languages
from core.ocr import build_default_registry
from core.workflow import CodeifyPipeline, EditingSession, describe_failure


async def run_workflow(drawing_path: Path, use_remote: bool, language: str, execute: bool) -> int:
    surface = StrokeSurface.from_bytes(drawing_path.read_bytes())
    print(f"입력: {drawing_path} ({len(surface.strokes)} strokes, {surface.width}x{surface.height})")

    executor = JDoodleClient() if execute else None
    session = EditingSession(
        CodeifyPipeline(build_default_registry()),
        executor=executor,
        language=language,
    )

    print(f"\nStep 1-3: 인식 ({'Google Vision' if use_remote else 'Tesseract'})...")
    result = await session.codeify(surface, use_remote)
    if not result.success:
        print(f"  ✗ {describe_failure(result)}")
        return 1

    print("  ✓ 인식 결과:")
    print(result.data["recognized_text"])
    print("\n" + "=" * 60)
    print(session.buffer)
    print("=" * 60)

    if not execute:
        return 0

    print("\nStep 4: 실행...")
    run_result = await session.run()
    if not run_result.success:
        print(f"  ✗ {describe_failure(run_result)}")
        return 1

    print(run_result.data["output"])
    return 0


def main():
    parser = argparse.ArgumentParser(description="Handwritten code drawing → code")
    parser.add_argument("drawing", type=Path, help="StrokeSurface JSON file")
    parser.add_argument("--remote", action="store_true", help="Use Google Vision instead of Tesseract")
    parser.add_argument("--language", default=DEFAULT_LANGUAGE, choices=supported_languages())
    parser.add_argument("--run", action="store_true", help="Execute the merged code with JDoodle")
    args = parser.parse_args()

    if not args.drawing.exists():
        print(f"Drawing not found: {args.drawing}", file=sys.stderr)
        sys.exit(1)

    sys.exit(asyncio.run(run_workflow(args.drawing, args.remote, args.language, args.run)))


if __name__ == "__main__":
    main()
