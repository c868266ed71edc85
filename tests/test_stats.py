import unittest

from cubetimer.stats.stats import (
    average_of_n,
    best,
    format_summary,
    format_time,
    mean,
    personal_best_index,
    summarize,
    worst,
)


class AverageTests(unittest.TestCase):
    def test_ao5_drops_best_and_worst(self) -> None:
        self.assertEqual(average_of_n([1000, 2000, 3000, 4000, 5000], 5), 3000)
        self.assertEqual(average_of_n([9000, 1000, 2000, 3000, 4000, 20000], 5), 3000)

    def test_ao12_uses_last_twelve(self) -> None:
        values = [1000 * i for i in range(1, 13)]
        self.assertEqual(average_of_n(values, 12), 6500)
        self.assertEqual(average_of_n([99999] + values, 12), 6500)

    def test_other_windows_are_plain_means(self) -> None:
        self.assertEqual(average_of_n([1000, 2000, 6000], 3), 3000)
        self.assertEqual(average_of_n([4000, 1000], 1), 1000)

    def test_not_enough_data(self) -> None:
        self.assertIsNone(average_of_n([1000, 2000, 3000, 4000], 5))
        self.assertIsNone(mean([]))
        self.assertIsNone(best([]))
        self.assertIsNone(worst([]))

    def test_invalid_window(self) -> None:
        with self.assertRaises(ValueError):
            average_of_n([1000], 0)

    def test_personal_best_ties_keep_earliest(self) -> None:
        self.assertEqual(personal_best_index([3000, 1000, 2000, 1000]), 1)
        self.assertIsNone(personal_best_index([]))


class FormatTests(unittest.TestCase):
    def test_format_time(self) -> None:
        self.assertEqual(format_time(None), "--")
        self.assertEqual(format_time(0), "0.00")
        self.assertEqual(format_time(12340), "12.34")
        self.assertEqual(format_time(59990), "59.99")
        self.assertEqual(format_time(75500), "1:15.50")
        self.assertEqual(format_time(600000), "10:00.00")

    def test_summary(self) -> None:
        s = summarize([1000, 2000, 3000])
        self.assertEqual(s["count"], 3)
        self.assertIsNone(s["ao5"])
        self.assertEqual((s["best"], s["worst"], s["mean"]), (1000, 3000, 2000))
        text = format_summary(s)
        self.assertIn("Solves: 3", text)
        self.assertIn("Ao5: --", text)
        self.assertIn("Best (PB): 1.00", text)


if __name__ == "__main__":
    unittest.main()
