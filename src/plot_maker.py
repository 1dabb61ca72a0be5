import os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
from ga_constants import ReportingConstants


class EvolutionVisualizer:
    def __init__(self, csv_directory):
        """
        Initialize the visualizer with the directory written by the GA reporter.
        """
        self.csv_directory = csv_directory
        self.history = self._load_history()
        self.data = self._load_all_csv()

    def _load_history(self):
        """
        Load the fitness history CSV (one row per generation).
        """
        file_path = os.path.join(self.csv_directory, ReportingConstants.FITNESS_HISTORY_FILE)
        if not os.path.isfile(file_path):
            return pd.DataFrame(columns=['generation', 'best_fitness', 'avg_fitness', 'worst_fitness'])
        return pd.read_csv(file_path)

    def _load_all_csv(self):
        """
        Load all generation CSV files, ordered by generation number.
        Each DataFrame corresponds to a generation.
        """
        prefix = ReportingConstants.GENERATION_FILE_PREFIX
        csv_files = [f for f in os.listdir(self.csv_directory)
                     if f.startswith(prefix) and f.endswith('.csv')]
        csv_files.sort(key=lambda f: int(f[len(prefix):-len('.csv')]))

        data = []
        for file in csv_files:
            df = pd.read_csv(os.path.join(self.csv_directory, file), dtype={'Genome': str})
            data.append(df)
        return data

    def fitness_summary(self):
        """
        Best and average fitness per generation computed from the generation CSVs.
        """
        rows = []
        for df in self.data:
            rows.append({
                'generation': int(df['Generation'].max()),
                'best_fitness': df['Fitness'].max(),
                'avg_fitness': df['Fitness'].mean()
            })
        return pd.DataFrame(rows, columns=['generation', 'best_fitness', 'avg_fitness'])

    def plot_best_individuals(self, save_path=None):
        """
        Plot the best individual's fitness across generations.
        """
        summary = self.fitness_summary()

        plt.figure(figsize=(10, 6))
        plt.plot(summary['generation'], summary['best_fitness'], marker='o', linestyle='-', color='b',
                 label='Best Fitness')
        plt.title('Best Fitness Across Generations')
        plt.xlabel('Generation')
        plt.ylabel('Best Fitness')
        plt.grid(True)
        return self._finish(save_path)

    def plot_average_fitness(self, save_path=None):
        """
        Plot the average fitness across generations, with the best fitness for reference.
        """
        plt.figure(figsize=(10, 6))
        plt.plot(self.history['generation'], self.history['avg_fitness'], marker='o', linestyle='-',
                 color='g', label='Average Fitness')
        plt.plot(self.history['generation'], self.history['best_fitness'], linestyle='--',
                 color='b', label='Best Fitness')
        plt.title('Average Fitness Across Generations')
        plt.xlabel('Generation')
        plt.ylabel('Average Fitness')
        plt.legend()
        plt.grid(True)
        return self._finish(save_path)

    def save_plots(self):
        """Write both plots next to the CSV files and return their paths."""
        if self.history.empty and not self.data:
            raise ValueError(f"No fitness data found in {self.csv_directory}")

        best_path = os.path.join(self.csv_directory, ReportingConstants.BEST_FITNESS_PLOT)
        average_path = os.path.join(self.csv_directory, ReportingConstants.AVERAGE_FITNESS_PLOT)
        return [self.plot_best_individuals(best_path), self.plot_average_fitness(average_path)]

    @staticmethod
    def _finish(save_path):
        if save_path:
            plt.savefig(save_path)
            plt.close()
            return save_path
        plt.show()
        return None
