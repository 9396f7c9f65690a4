import math

DEFAULT_THRESHOLD = 5_000_000
DEFAULT_TARGET_BINS = 150


def round_block_size(raw: float, digits: int = 3) -> int:
    """
    Round a raw block size to `digits` significant digits (never below 1).

    33333.3 -> 33300, 6666.6 -> 6670, 66.6 -> 67
    """
    if raw < 1:
        return 1
    magnitude = int(math.floor(math.log10(raw)))
    granularity = 10 ** max(magnitude - (digits - 1), 0)
    return max(int(round(raw / granularity)) * granularity, 1)


def count_windows(length: int, block_size: int) -> int:
    return -(-length // block_size)


def plan_block_sizes(
    chromosomes,
    threshold: int = DEFAULT_THRESHOLD,
    target_bins: int = DEFAULT_TARGET_BINS,
) -> dict:
    """
    Split chromosomes by size and pick one block size per group.

    Chromosomes longer than `threshold` form the large group, the others
    (length <= threshold) the small group. Each group gets the block size
    that cuts its shortest chromosome into `target_bins` windows, so small
    chromosomes are sampled at a finer resolution.

    Args:
        chromosomes (list[Chromosome]): anything with `.length`.
        threshold (int): size cutoff in bp.
        target_bins (int): windows wanted on the shortest chromosome.

    Returns:
        dict: {block_size: [chromosome, ...]}, large group first. Both groups
        share one key when they round to the same block size.
    """
    if threshold <= 0:
        raise ValueError(f"threshold must be positive, got {threshold}")
    if target_bins <= 0:
        raise ValueError(f"target_bins must be positive, got {target_bins}")

    big, small = [], []
    for chrom in chromosomes:
        if chrom.length <= 0:
            raise ValueError(
                f"Chromosome {getattr(chrom, 'name', chrom)} has no length"
            )
        if chrom.length > threshold:
            big.append(chrom)
        else:
            small.append(chrom)

    plan = {}
    for group in (big, small):
        if not group:
            continue
        min_length = min(c.length for c in group)
        block_size = round_block_size(min_length / target_bins)
        plan.setdefault(block_size, []).extend(group)
    return plan
