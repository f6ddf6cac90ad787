"""Choice normalization core: model, classifiers, option parser and assembler."""
