"""
Write engine results to JSON and recommendations to CSV.
"""

import logging
import pandas as pd
from pathlib import Path
from datetime import datetime
from typing import Optional

from . import config
from .draft.api_serializers import AnalysisResponse

logger = logging.getLogger(__name__)


class OutputWriter:
    """Writes analysis results to the output directory."""

    def __init__(self, output_dir: str = None):
        """
        Initialize the output writer.

        Args:
            output_dir: Directory to write output files (default from config),
                created on first write
        """
        self.output_dir = Path(output_dir or config.OUTPUT_DIR)

    def _resolve(self, filename: Optional[str], prefix: str, suffix: str) -> Path:
        if filename is None:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f"{prefix}_{timestamp}{suffix}"
        path = Path(filename)
        if not path.is_absolute():
            path = self.output_dir / path
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def write_analysis(self, response: AnalysisResponse, filename: Optional[str] = None) -> Path:
        """
        Write the full analysis as JSON.

        Writes to a temp file first, then renames, so a reader never sees a
        partial file.

        Args:
            response: Serialized analysis
            filename: Output filename (default: analysis_<timestamp>.json)

        Returns:
            Path of the written file
        """
        output_path = self._resolve(filename, 'analysis', '.json')

        temp_path = output_path.with_suffix('.tmp')
        with open(temp_path, 'w', encoding='utf-8') as f:
            f.write(response.model_dump_json(indent=2))
        temp_path.replace(output_path)

        logger.info(
            f"Wrote analysis for pick {response.current_pick}: "
            f"{len(response.recommendations)} recommendations → {output_path}"
        )
        return output_path

    def recommendations_to_dataframe(self, response: AnalysisResponse) -> pd.DataFrame:
        """
        Flatten recommendations to one row each.

        Returns:
            DataFrame with rank, type, title, confidence, urgency, score,
            risk_level, potential_impact and suggested player names
        """
        rows = []
        for rank, rec in enumerate(response.recommendations, 1):
            rows.append({
                'rank': rank,
                'type': rec.type,
                'title': rec.title,
                'confidence': round(rec.confidence, 1),
                'urgency': round(rec.urgency, 1),
                'score': round(rec.confidence * rec.urgency, 1),
                'risk_level': rec.risk_level,
                'potential_impact': round(rec.potential_impact, 1),
                'suggested_players': ', '.join(p.name for p in rec.suggested_players),
            })

        columns = [
            'rank', 'type', 'title', 'confidence', 'urgency', 'score',
            'risk_level', 'potential_impact', 'suggested_players',
        ]
        return pd.DataFrame(rows, columns=columns)

    def write_recommendations_csv(self, response: AnalysisResponse, filename: Optional[str] = None) -> Path:
        """
        Write ranked recommendations as CSV.

        Args:
            response: Serialized analysis
            filename: Output filename (default: recommendations_<timestamp>.csv)

        Returns:
            Path of the written file
        """
        output_path = self._resolve(filename, 'recommendations', '.csv')

        df = self.recommendations_to_dataframe(response)
        df.to_csv(output_path, index=False)

        logger.info(f"Wrote {len(df)} recommendations to {output_path}")
        return output_path
