# Copyright 2024 Liu Siyao
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging

import slidemark.renderer as renderer
from slidemark.parser import parse
from slidemark.toc import build_toc
from slidemark.types import ConversionConfig

logger = logging.getLogger(__name__)


def convert(config: ConversionConfig):
    if not config.source_files:
        logger.error("No source files given")
        return

    logger.info("conversion started")
    stem = config.source_files[0].parent.name or config.source_files[0].stem

    presentation = parse(config)
    toc = build_toc(presentation, config.toc_similarity_cutoff)
    logger.info(f'Parsed {len(presentation.chapters)} chapters with {len(presentation.slides())} slides')

    formats_selected = False
    if config.is_json:
        formats_selected = True
        config.output_path = config.output_dir / f'{stem}.json'
        config.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config.output_path, 'w', encoding='utf8') as f:
            f.write(presentation.model_dump_json(indent=2))
        logger.info(f'Presentation data saved to {config.output_path}')

    if config.is_md:
        formats_selected = True
        config.output_path = config.output_dir / f'{stem}.md'
        out = renderer.MarkdownRenderer(config)
        out.render(presentation, toc)
        out.close()
        logger.info(f'Converted Markdown document saved to {config.output_path}')

    if not formats_selected:
        logger.error("No output format specified")

    return presentation
