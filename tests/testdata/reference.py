def reference_combine(interleaved, stride):
    """Sequential first-occurrence scan keyed by tuple content."""
    interleaved = [int(v) for v in interleaved]
    ids = {}
    combined = []
    reduced = []
    for start in range(0, len(interleaved), stride):
        item = tuple(interleaved[start : start + stride])
        if item not in ids:
            ids[item] = len(ids)
            reduced.extend(item)
        combined.append(ids[item])
    return combined, reduced
