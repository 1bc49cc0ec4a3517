"""roadmap-generator - AI-powered semester roadmaps for engineering students

Main entry point for the roadmap generator.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from src.generate import SUPPORTED_PROVIDERS, LLMClient
from src.roadmap import RoadmapRequest, handle_submission, save_output

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('roadmap.log', encoding='utf-8')
    ]
)

logger = logging.getLogger(__name__)

API_KEY_ENV = {
    'gemini': 'GEMINI_API_KEY',
    'openai': 'OPENAI_API_KEY',
    'anthropic': 'ANTHROPIC_API_KEY',
}


def _parse_timeout(env_name: str) -> Optional[float]:
    """Return positive float or None for empty/zero env values."""
    value = os.getenv(env_name)
    if value is None:
        return None
    value = value.strip()
    if not value or value == "0":
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"{env_name} must be a positive number") from exc
    return parsed if parsed > 0 else None


def load_config():
    """Load configuration from environment variables

    Returns:
        Dictionary with configuration values
    """
    load_dotenv()

    config = {
        'llm_provider': os.getenv('LLM_PROVIDER', 'gemini').lower(),
        'prompt_variant': os.getenv('PROMPT_VARIANT') or None,
        'request_timeout': _parse_timeout('REQUEST_TIMEOUT_SECONDS'),
        'output_file': os.getenv('OUTPUT_FILE', 'roadmap.html'),
    }

    # Validate LLM provider
    if config['llm_provider'] not in SUPPORTED_PROVIDERS:
        logger.error(f"Invalid LLM_PROVIDER: {config['llm_provider']}")
        raise ValueError("LLM_PROVIDER must be 'gemini', 'openai' or 'anthropic'")

    # Check API key
    key_env = API_KEY_ENV[config['llm_provider']]
    if not os.getenv(key_env):
        logger.error(f"{key_env} not set")
        raise ValueError(f"{key_env} is required when using {config['llm_provider']}")

    logger.info(f"Configuration loaded: LLM={config['llm_provider']}, "
                f"variant={config['prompt_variant'] or 'default'}, "
                f"timeout={config['request_timeout']}")

    return config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a personalized semester roadmap")
    parser.add_argument("--semester", required=True, help="Current semester (e.g. 3)")
    parser.add_argument("--branch", required=True, help="Engineering branch label")
    parser.add_argument("--skills", default="", help="Existing skills, free text")
    parser.add_argument("--variant", help="Prompt variant override (default, concise)")
    parser.add_argument("--output", "-o", help="Path to write the HTML panel")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main execution flow"""
    args = parse_args(argv)

    try:
        config = load_config()

        llm_client = LLMClient(
            provider=config['llm_provider'],
            timeout=config['request_timeout'],
        )
        request = RoadmapRequest(
            semester=args.semester,
            branch=args.branch,
            skills=args.skills,
        )

        outcome = handle_submission(
            request,
            llm_client,
            variant=args.variant or config['prompt_variant'],
            display=logger.info,
        )

        save_output(outcome.html, output_file=args.output or config['output_file'])
        print(outcome.html)
        return 0 if outcome.succeeded else 1

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
