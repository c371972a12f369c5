"""
Report Builder Module
Generates review reports for an annotated diff tree using Jinja2 templates.
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from diffcore.nodes import Root, summarize
from diffcore.resolver import Decisions, decision_for, resolve, review_stats
from utils.file_utils import write_file_content

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / 'templates'

# Splits a part into tags and the text between them
TAG_SPLIT_RE = re.compile(r'(<[^<>]*>)')


def redline(part: Dict) -> str:
    """Render one inline part with <ins>/<del> around its text only.

    Tags of an added or equal part are emitted as they are, tags of a
    removed part are dropped, so the wrappers never cut across the
    document's own elements.
    """
    if not part['added'] and not part['removed']:
        return part['text']
    wrapper = 'ins' if part['added'] else 'del'
    pieces = []
    for piece in TAG_SPLIT_RE.split(part['text']):
        if not piece:
            continue
        if TAG_SPLIT_RE.fullmatch(piece):
            if part['added']:
                pieces.append(piece)
        else:
            pieces.append(f"<{wrapper}>{piece}</{wrapper}>")
    return ''.join(pieces)


class ReportBuilder:
    def __init__(self, template_dir: Union[str, Path] = TEMPLATE_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html']),
        )
        self.env.filters['redline'] = redline
        self.template = self.env.get_template('review_report.html')

    def collect_metrics(self, tree: Root, decisions: Optional[Decisions] = None) -> Dict:
        """Collect status counts and review progress."""
        return {
            'summary': summarize(tree),
            'review': review_stats(tree, decisions),
        }

    def _decision_labels(self, decisions: Optional[Decisions]) -> Dict[str, str]:
        labels = {}
        for node_id in (decisions or {}):
            labels[node_id] = decision_for(decisions, node_id).value
        return labels

    def render_html(self, tree: Root, decisions: Optional[Decisions] = None,
                    title: str = 'Review report') -> str:
        """Render a redline of the tree followed by the resolved document."""
        return self.template.render(
            title=title,
            tree=tree.to_dict(),
            decisions=self._decision_labels(decisions),
            metrics=self.collect_metrics(tree, decisions),
            resolved=resolve(tree, decisions),
        )

    def build_json(self, tree: Root, decisions: Optional[Decisions] = None) -> Dict:
        return {
            'tree': tree.to_dict(),
            'metrics': self.collect_metrics(tree, decisions),
            'decisions': self._decision_labels(decisions),
            'resolved': resolve(tree, decisions),
        }

    def generate_html_report(self, output_path: Union[str, Path], tree: Root,
                             decisions: Optional[Decisions] = None,
                             title: str = 'Review report') -> Path:
        """Generate HTML report with the redline and the resolved document."""
        logger.info(f"Generating HTML report: {output_path}")
        return write_file_content(output_path, self.render_html(tree, decisions, title))

    def generate_json_report(self, output_path: Union[str, Path], tree: Root,
                             decisions: Optional[Decisions] = None) -> Path:
        """Generate JSON report with raw diff data."""
        logger.info(f"Generating JSON report: {output_path}")
        content = json.dumps(self.build_json(tree, decisions), indent=2, ensure_ascii=False)
        return write_file_content(output_path, content)
