"""Pytest configuration and shared fixtures for gtf2refflat tests.

This module contains fixtures that are shared across multiple test modules.
Fixtures are organized by category:

- Line builders: Produce GTF lines and feature records programmatically
- File fixtures: Write small GTF files to a temporary directory
"""

from pathlib import Path
from typing import Callable

import pytest

from gtf2refflat.io.gtf import FeatureRecord, Strand


# =============================================================================
# Line Builders
# =============================================================================


def gtf_line(
    feature_type: str,
    start: int,
    end: int,
    strand: str = "+",
    transcript_id: str | None = "T1",
    gene_id: str | None = "G1",
    seqid: str = "chr1",
) -> str:
    """Build one GTF line with 1-based inclusive coordinates."""
    attrs = []
    if gene_id is not None:
        attrs.append(f'gene_id "{gene_id}";')
    if transcript_id is not None:
        attrs.append(f'transcript_id "{transcript_id}";')
    attr_str = " ".join(attrs)
    return f"{seqid}\ttest\t{feature_type}\t{start}\t{end}\t.\t{strand}\t.\t{attr_str}"


def feature(
    feature_type: str,
    start: int,
    end: int,
    strand: Strand = Strand.FORWARD,
    transcript_id: str = "T1",
    gene_id: str = "G1",
    contig: str = "chr1",
) -> FeatureRecord:
    """Build a FeatureRecord with 0-based half-open coordinates."""
    return FeatureRecord(
        contig=contig,
        start=start,
        end=end,
        strand=strand,
        type=feature_type,
        gene_id=gene_id,
        transcript_id=transcript_id,
    )


@pytest.fixture
def make_gtf(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing GTF lines to a file in tmp_path."""

    def _make(lines: list[str], name: str = "test.gtf") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _make


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def scenario_a_gtf(make_gtf: Callable[..., Path]) -> Path:
    """Forward transcript with one exon and both codons."""
    return make_gtf(
        [
            gtf_line("exon", 101, 200),
            gtf_line("start_codon", 101, 103),
            gtf_line("stop_codon", 198, 200),
        ]
    )


@pytest.fixture
def scenario_b_gtf(make_gtf: Callable[..., Path]) -> Path:
    """Forward transcript without exon records and two CDS segments."""
    return make_gtf(
        [
            gtf_line("CDS", 101, 150),
            gtf_line("CDS", 201, 250),
        ]
    )


@pytest.fixture
def scenario_c_gtf(make_gtf: Callable[..., Path]) -> Path:
    """Transcript whose features disagree on strand."""
    return make_gtf(
        [
            gtf_line("exon", 101, 200, strand="+"),
            gtf_line("exon", 301, 400, strand="-"),
        ]
    )


@pytest.fixture
def multi_transcript_gtf(make_gtf: Callable[..., Path]) -> Path:
    """Small annotation with header, gene line and three transcripts.

    - T1 (G1, +): two exons with codons
    - T2 (G1, +): single exon, no CDS
    - T3 (G2, -): two exons with codons and CDS
    """
    return make_gtf(
        [
            "#!genome-build test",
            "",
            'chr1\ttest\tgene\t101\t600\t.\t+\t.\tgene_id "G1";',
            gtf_line("exon", 101, 200, transcript_id="T1"),
            gtf_line("exon", 301, 600, transcript_id="T1"),
            gtf_line("CDS", 151, 200, transcript_id="T1"),
            gtf_line("CDS", 301, 450, transcript_id="T1"),
            gtf_line("start_codon", 151, 153, transcript_id="T1"),
            gtf_line("stop_codon", 451, 453, transcript_id="T1"),
            gtf_line("exon", 101, 600, transcript_id="T2"),
            gtf_line("exon", 1001, 1100, "-", transcript_id="T3", gene_id="G2", seqid="chr2"),
            gtf_line("exon", 1201, 1400, "-", transcript_id="T3", gene_id="G2", seqid="chr2"),
            gtf_line("stop_codon", 1051, 1053, "-", transcript_id="T3", gene_id="G2", seqid="chr2"),
            gtf_line("start_codon", 1298, 1300, "-", transcript_id="T3", gene_id="G2", seqid="chr2"),
        ]
    )
