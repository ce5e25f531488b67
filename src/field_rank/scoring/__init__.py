"""
BM25F scoring package.

- models: FieldKind, Document and Query
- lengths: per-field length statistics and corpus averages
- normalizer: length normalization of raw term frequencies
- idf: IDF lookup table with an unseen-term default
- term_frequencies: raw per-field term frequency extraction
- scorer: BM25Scorer combining fields, IDF and PageRank
"""
