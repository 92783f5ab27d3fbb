"""
jsonpalpate demonstration script.
"""

import jsonpalpate


def main():
    print("jsonpalpate - Relaxed JSON Parser Demo")
    print("=" * 40)

    examples = [
        ('{"name": "John", "age": 30}', "Strict JSON"),
        ("{name: 'John', tags: ['a', 'b',],}", "JSON5 syntax"),
        ("{active: True, missing: None}", "Python constants"),
        ("{id: 0xFF, mask: 0b1010, big: 123n}", "Radix and BigInt numbers"),
        ("{fn: (x) => x * 2, pattern: /^a+$/i, at: new Date()}", "JavaScript expressions"),
        ("name: John\nroles:\n  - admin\n  - dev", "YAML"),
        ('{\n  "a": 1,\n  "b": @oops\n}', "Broken input"),
    ]

    for i, (text, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:    {text}")

        outcome = jsonpalpate.parse(text)
        if outcome.success:
            print(f"Output:   {outcome.value}")
            features = jsonpalpate.detect_features(text)
            if features:
                print(f"Features: {', '.join(features)}")
        else:
            error = outcome.error
            print(
                f"Error:    line {error.line}, column {error.column} "
                f"at {error.json_path}: {error.message}"
            )

    print(f"\n{len(examples) + 1}. Locating a path")
    text = '{"users": [{"name": "Ann"}, {"name": "Bo"}]}'
    text_range = jsonpalpate.path_to_text_range(text, "$.users[1].name")
    print(f"Input:    {text}")
    print(f"Range:    {text_range}")


if __name__ == "__main__":
    main()
