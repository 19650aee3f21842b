"""
Empirical-Bayes 첫 시즌 ERA 실행 스크립트

1. Lahman Pitching / People 로드 (로컬 CSV 또는 pybaseball)
2. ERA 파이프라인 (aggregate → prior → posterior → evaluation)
3. 요약 + 순위 테이블 출력

Usage:
    python -m scripts.run_era                             # pybaseball로 다운로드
    python -m scripts.run_era --data-dir data/lahman      # 로컬 CSV
    python -m scripts.run_era --min-prior-ip 30 --top 15
"""

import argparse
import logging
import os
import sys

import pandas as pd
from dotenv import load_dotenv

# Setup
logging.basicConfig(level=logging.INFO, format='%(asctime)s %(message)s', datefmt='%H:%M:%S')
load_dotenv(os.path.join(os.path.dirname(__file__), '..', '.env'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.engine.era_model_config import EraModelConfig
from src.engine.era_types import EraModelError
from src.engine.evaluation import rank_improvements
from src.etl.lahman_loader import load_lahman_tables
from src.pipeline.era_pipeline import run_era_pipeline
from src.pipeline.report_tables import (
    attach_names,
    credible_interval_frame,
    format_summary,
    sample_players,
    top_by,
)

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description='Empirical-Bayes First-Year ERA')
    parser.add_argument('--data-dir', type=str, default=os.environ.get('LAHMAN_DATA_DIR'),
                        help='Directory with Pitching.csv / People.csv (default: fetch with pybaseball)')
    parser.add_argument('--config', type=str, default=os.environ.get('ERA_MODEL_CONFIG'),
                        help='YAML config path')
    parser.add_argument('--min-prior-ip', type=float, help='Minimum first-year IP for the prior fit')
    parser.add_argument('--min-career-ip', type=float, help='Minimum career IP for evaluation')
    parser.add_argument('--start-year', type=int, help='First season to include')
    parser.add_argument('--top', type=int, default=10, help='Rows per ranked table')
    return parser.parse_args()


def print_table(title: str, df: pd.DataFrame, columns: list[str]):
    print(f"\n{title}")
    print(df[columns].to_string(index=False, float_format=lambda x: f"{x:.2f}"))


def main() -> int:
    args = parse_args()

    config = EraModelConfig(
        args.config,
        min_prior_ip=args.min_prior_ip,
        min_career_ip=args.min_career_ip,
        start_year=args.start_year,
    )

    seasons, people = load_lahman_tables(args.data_dir)

    try:
        result = run_era_pipeline(seasons, config)
    except EraModelError as e:
        logger.error(f"ERA pipeline failed: {e}")
        return 1

    print("\n" + format_summary(result))

    named_first = attach_names(result.first_year, people)
    print_table(f"Lowest first-year ERA (IP > {config.min_prior_ip:g})",
                top_by(named_first[named_first['ip'] > config.min_prior_ip], 'era', args.top, ascending=True),
                ['full_name', 'er', 'ip', 'era'])

    named_post = attach_names(result.posteriors, people)
    print_table("Lowest posterior median ERA",
                top_by(named_post, 'era_median', args.top, ascending=True),
                ['full_name', 'er', 'ip', 'raw_era', 'era_median', 'era_lower', 'era_upper'])
    print_table("Highest posterior median ERA",
                top_by(named_post, 'era_median', args.top),
                ['full_name', 'er', 'ip', 'raw_era', 'era_median', 'era_lower', 'era_upper'])

    for seed in config.sample_seeds:
        sample = credible_interval_frame(sample_players(result.posteriors, config.sample_size, seed))
        print_table(f"Credible intervals, random sample (seed={seed})",
                    attach_names(sample, people),
                    ['full_name', 'ip', 'raw_era', 'lower', 'median', 'upper'])

    records = attach_names(result.evaluation.records, people)
    eval_cols = ['full_name', 'first_ip', 'career_era', 'naive_era', 'bayes_era', 'se_diff']
    print_table("Largest Bayes improvement", rank_improvements(records, args.top), eval_cols)
    print_table("Largest Bayes regression", rank_improvements(records, args.top, ascending=True), eval_cols)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
